"""Typed configuration loader for the chained hash dictionary."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .core.chained import ChainConfig
from .core.pair_store import DEFAULT_CHAIN_CAPACITY, is_count

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _coerce_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in _TRUE_WORDS:
            return True
        if normalized in _FALSE_WORDS:
            return False
        raise BadInputError(f"{name} must be boolean")
    return bool(raw)


@dataclass
class TablePolicy:
    initial_buckets: int = 5
    max_load_ratio: float = 1.0
    chain_capacity: int = DEFAULT_CHAIN_CAPACITY
    check_concurrent_modification: bool = True

    def validate(self) -> None:
        for name in ("initial_buckets", "chain_capacity"):
            value = getattr(self, name)
            if not is_count(value) or value < 1:
                raise BadInputError(f"table.{name} must be an integer >= 1, got {value!r}")
        ratio = self.max_load_ratio
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not ratio > 0.0:
            raise BadInputError(f"table.max_load_ratio must be a number > 0, got {ratio!r}")

    def to_chain_config(self) -> ChainConfig:
        return ChainConfig(
            initial_buckets=self.initial_buckets,
            max_load_ratio=self.max_load_ratio,
            chain_capacity=self.chain_capacity,
            check_concurrent_modification=self.check_concurrent_modification,
        )


@dataclass
class LoggingPolicy:
    level: str = "INFO"
    json: bool = False
    file: str | None = None

    def validate(self) -> None:
        if self.level.upper() not in _LOG_LEVELS:
            raise BadInputError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")


@dataclass
class AppConfig:
    table: TablePolicy = field(default_factory=TablePolicy)
    logging: LoggingPolicy = field(default_factory=LoggingPolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        table_data = data.get("table", {})
        if not isinstance(table_data, dict):
            raise BadInputError("[table] section must be a table")
        table_data = dict(table_data)
        if "check_concurrent_modification" in table_data:
            table_data["check_concurrent_modification"] = _coerce_bool(
                "table.check_concurrent_modification", table_data["check_concurrent_modification"]
            )
        try:
            table = TablePolicy(**table_data)
        except TypeError as exc:
            raise BadInputError(f"Unknown [table] key: {exc}") from exc

        logging_data = data.get("logging", {})
        if not isinstance(logging_data, dict):
            raise BadInputError("[logging] section must be a table")
        logging_kwargs: dict[str, Any] = {}
        if "level" in logging_data:
            logging_kwargs["level"] = str(logging_data["level"]).upper()
        if "json" in logging_data:
            logging_kwargs["json"] = _coerce_bool("logging.json", logging_data["json"])
        if "file" in logging_data:
            raw_file = logging_data["file"]
            logging_kwargs["file"] = str(raw_file) if raw_file else None
        return cls(table=table, logging=LoggingPolicy(**logging_kwargs))

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        table_mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "CHAINHASH_INITIAL_BUCKETS": ("initial_buckets", int),
            "CHAINHASH_MAX_LOAD_RATIO": ("max_load_ratio", float),
            "CHAINHASH_CHAIN_CAPACITY": ("chain_capacity", int),
        }
        for key, (attr, caster) in table_mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(self.table, attr, value)

        raw_check = env.get("CHAINHASH_CHECK_CONCURRENT_MODIFICATION")
        if raw_check is not None:
            try:
                self.table.check_concurrent_modification = _coerce_bool("check", raw_check)
            except BadInputError as exc:
                raise BadInputError(
                    f"Invalid env override CHAINHASH_CHECK_CONCURRENT_MODIFICATION={raw_check!r}"
                ) from exc

        raw_level = env.get("CHAINHASH_LOG_LEVEL")
        if raw_level is not None:
            self.logging.level = raw_level.strip().upper()
        raw_json = env.get("CHAINHASH_LOG_JSON")
        if raw_json is not None:
            try:
                self.logging.json = _coerce_bool("json", raw_json)
            except BadInputError as exc:
                raise BadInputError(f"Invalid env override CHAINHASH_LOG_JSON={raw_json!r}") from exc
        raw_file = env.get("CHAINHASH_LOG_FILE")
        if raw_file is not None:
            self.logging.file = raw_file or None

    def validate(self) -> None:
        self.table.validate()
        self.logging.validate()


DEFAULT_CONFIG = AppConfig()


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)
