"""
Configuration for pnut.

Defines ChartSettings, a frozen dataclass carrying the defaults used when building
scales and bins. Defaults are sourced from pnut.core.constants (the single source
of truth).

Source of truth
- pnut.core.constants.BAND_PADDING_INNER, BAND_PADDING_OUTER, BAND_ALIGN, CLAMP
- pnut.core.constants.DEFAULT_THRESHOLDS, THRESHOLD_STRATEGIES, LOG_LEVEL

Notes
- Precedence for ChartSettings.load(): env > TOML > defaults.
- ChartData and use_scales() take an explicit settings object; they never read the
  environment on their own.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .constants import BAND_ALIGN as CORE_BAND_ALIGN
from .constants import BAND_PADDING_INNER as CORE_BAND_PADDING_INNER
from .constants import BAND_PADDING_OUTER as CORE_BAND_PADDING_OUTER
from .constants import CLAMP as CORE_CLAMP
from .constants import DEFAULT_THRESHOLDS as CORE_DEFAULT_THRESHOLDS
from .constants import LOG_LEVEL as CORE_LOG_LEVEL
from .constants import THRESHOLD_STRATEGIES
from .errors import ChartConfigError

__all__ = ["ChartSettings"]

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


def _unit_float(v: Any, name: str) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError) as exc:
        raise ChartConfigError(f"{name} must be a number (got {v!r})") from exc
    if not 0.0 <= f <= 1.0:
        raise ChartConfigError(f"{name} must be within [0, 1] (got {f})")
    return f


@dataclass(frozen=True)
class ChartSettings:
    """
    Runtime settings for scale and bin construction.

    Attributes:
        band_padding_inner (float): Inner padding for band scales, in [0, 1].
        band_padding_outer (float): Outer padding for band and point scales, in [0, 1].
        band_align (float): Alignment of bands within the range, in [0, 1].
        band_round (bool): Round band start/bandwidth to integers.
        clamp (bool): Clamp continuous scale output to the range.
        default_thresholds (str): Bin threshold rule used when none is supplied
            ("sturges" | "scott" | "freedman_diaconis").
        memoize (bool): Cache aggregate results per ChartData instance.
        log_level (str): Level used by pnut.core.logging_config.setup_logging().

    Examples:
        >>> from pnut.core.config import ChartSettings
        >>> ChartSettings(band_padding_inner=0.1)  # doctest: +ELLIPSIS
        ChartSettings(...)
    """

    band_padding_inner: float = CORE_BAND_PADDING_INNER
    band_padding_outer: float = CORE_BAND_PADDING_OUTER
    band_align: float = CORE_BAND_ALIGN
    band_round: bool = False
    clamp: bool = CORE_CLAMP
    default_thresholds: str = CORE_DEFAULT_THRESHOLDS
    memoize: bool = True
    log_level: str = CORE_LOG_LEVEL

    def __post_init__(self) -> None:
        for name in ("band_padding_inner", "band_padding_outer", "band_align"):
            _unit_float(getattr(self, name), name)
        if self.default_thresholds not in THRESHOLD_STRATEGIES:
            raise ChartConfigError(
                f"default_thresholds must be one of {list(THRESHOLD_STRATEGIES)} "
                f"(got {self.default_thresholds!r})"
            )
        if self.log_level not in _LOG_LEVELS:
            raise ChartConfigError(
                f"log_level must be one of {sorted(_LOG_LEVELS)} (got {self.log_level!r})"
            )

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: ChartSettings, cfg: dict[str, Any] | None) -> ChartSettings:
        """Apply a loose config mapping onto ChartSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        for name in ("band_padding_inner", "band_padding_outer", "band_align"):
            if name in cfg:
                s = replace(s, **{name: _unit_float(cfg[name], name)})

        if "band_round" in cfg:
            s = replace(s, band_round=_bool(cfg["band_round"]))

        if "clamp" in cfg:
            s = replace(s, clamp=_bool(cfg["clamp"]))

        if "memoize" in cfg:
            s = replace(s, memoize=_bool(cfg["memoize"]))

        if "default_thresholds" in cfg and isinstance(cfg["default_thresholds"], str):
            strategy = cfg["default_thresholds"].strip().lower()
            if strategy in THRESHOLD_STRATEGIES:
                s = replace(s, default_thresholds=strategy)

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        return s

    @classmethod
    def from_env(cls, base: ChartSettings | None = None, prefix: str = "PNUT_") -> ChartSettings:
        """
        Build ChartSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - PNUT_BAND_PADDING_INNER
            - PNUT_BAND_PADDING_OUTER
            - PNUT_BAND_ALIGN
            - PNUT_BAND_ROUND (1/0/true/false/yes/no/on/off)
            - PNUT_CLAMP
            - PNUT_DEFAULT_THRESHOLDS ("sturges" | "scott" | "freedman_diaconis")
            - PNUT_MEMOIZE
            - PNUT_LOG_LEVEL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for name in (
            "band_padding_inner",
            "band_padding_outer",
            "band_align",
            "band_round",
            "clamp",
            "default_thresholds",
            "memoize",
            "log_level",
        ):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> ChartSettings:
        """
        Build ChartSettings from a TOML file.

        Search order when `path` is None:
            1) ./pnut.toml (with either a [pnut] table or top-level keys)
            2) ./pyproject.toml under [tool.pnut]

        Returns defaults if no file is present.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "pnut.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("pnut", {}) if isinstance(tool, dict) else None
            else:
                if "pnut" in data and isinstance(data["pnut"], dict):
                    cfg = data["pnut"]
                else:
                    cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> ChartSettings:
        """
        Load ChartSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (pnut.toml, pyproject.toml).

        Returns:
            ChartSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
