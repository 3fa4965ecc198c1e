from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)


class _RuntimeStore:
    config: dict[str, Any] | None = None


_RUNTIME_STORE = _RuntimeStore()


def set_runtime_config(cfg: dict[str, Any] | None) -> None:
    """実行時（アップロード）で与えられた設定を保持する。None で解除。"""
    _RUNTIME_STORE.config = cfg if isinstance(cfg, dict) else None


def set_runtime_toml_bytes(data: bytes) -> bool:
    """アップロードされた TOML バイト列から実行時設定を反映する。

    解釈できなかった場合は設定を解除して False を返す。
    """
    try:
        cfg = tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("config.toml を読み込めませんでした: %s", e)
        set_runtime_config(None)
        return False
    set_runtime_config(cfg)
    return True


def _get_config() -> dict[str, Any]:
    """現在有効な設定を返す。

    方針: デフォルトではローカルの TOML を読み込まない。
    - アップロードによって与えられたランタイム設定があればそれを返す。
    - それ以外は空辞書を返し、各呼び出し側で default 値にフォールバックさせる。
    """
    if isinstance(_RUNTIME_STORE.config, dict):
        return _RUNTIME_STORE.config
    return {}


def get_app_title(default: str = "絵文字神経衰弱") -> str:
    cfg = _get_config()
    title = cfg.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return default


def load_default_settings_values() -> dict[str, int]:
    result: dict[str, int] = {}
    settings = _get_config().get("settings")
    if isinstance(settings, dict):
        # 不正な型（bool を含む）の場合は各呼び出し側でコード既定値へフォールバックする。
        for key in ("pairs", "minutes", "cols"):
            value = settings.get(key)
            if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                result[key] = value
    return result


if TYPE_CHECKING:
    from src.memory_match.app.state import Settings as _SettingsType


def load_default_settings() -> _SettingsType:
    from src.memory_match.app.state import Settings  # 局所インポートで循環回避

    values = load_default_settings_values()
    return Settings(
        pair_count=int(values.get("pairs", Settings.pair_count)),
        minutes=int(values.get("minutes", Settings.minutes)),
        cols=int(values.get("cols", Settings.cols)),
    )
