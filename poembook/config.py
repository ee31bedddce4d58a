"""Configuration for a poem compilation run.

All settings have defaults, so a config file is optional. When given, the file
is YAML with a flat mapping; segmentation thresholds sit under a nested
``segmentation`` key::

	dedup_min_length: 50
	document_title: My Poems
	show_progress: true
	segmentation:
	  min_content_length: 10
	  candidate_title_max_length: 100
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from poembook.collection.manager import DEDUP_MIN_LENGTH
from poembook.export.render import DEFAULT_DOCUMENT_TITLE
from poembook.ingestion.segmentation import SegmentationConfig

__all__ = ["CompilerConfig", "load_config"]


@dataclass
class CompilerConfig:
	segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
	dedup_min_length: int = DEDUP_MIN_LENGTH
	document_title: str = DEFAULT_DOCUMENT_TITLE
	show_progress: bool = False


def _check_keys(data: Dict[str, Any], cls: type, where: str) -> None:
	known = {f.name for f in fields(cls)}
	unknown = sorted(set(data) - known)
	if unknown:
		raise ValueError(f"unknown {where} setting(s): {', '.join(unknown)}")


def _check_types(data: Dict[str, Any], defaults: Any, where: str) -> None:
	for key, value in data.items():
		expected = type(getattr(defaults, key))
		# bool is an int subclass, so compare exact types
		if type(value) is not expected:
			raise ValueError(
				f"{where} setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
			)


def load_config(path: Optional[Union[str, Path]] = None) -> CompilerConfig:
	"""Load a :class:`CompilerConfig` from a YAML file.

	Parameters
	----------
	path : str | Path | None
		Config file location. ``None`` returns the defaults.

	Raises
	------
	ValueError
		If the file does not hold a mapping of known settings with values
		of the expected types.
	"""
	if path is None:
		return CompilerConfig()

	data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
	if not isinstance(data, dict):
		raise ValueError("config file must contain a mapping")
	_check_keys(data, CompilerConfig, "config")

	seg_data = data.pop("segmentation", None) or {}
	if not isinstance(seg_data, dict):
		raise ValueError("'segmentation' must be a mapping")
	_check_keys(seg_data, SegmentationConfig, "segmentation")
	_check_types(seg_data, SegmentationConfig(), "segmentation")
	_check_types(data, CompilerConfig(), "config")

	return CompilerConfig(segmentation=SegmentationConfig(**seg_data), **data)
