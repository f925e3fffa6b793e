"""
Native shell cosmetics and packaging config.

On iOS and Android the web app runs inside a WebView. `configure_status_bar`
sets the status bar once at startup. `ShellConfig` is the declarative config
the native build tool reads.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Protocol

logger = logging.getLogger(__name__)

BRAND_COLOR = "#7c3aed"


class StatusBarStyle(str, Enum):
    """Status bar content style. LIGHT means light text for dark backgrounds."""

    LIGHT = "LIGHT"
    DARK = "DARK"
    DEFAULT = "DEFAULT"


class NativeBridge(Protocol):
    def is_native_platform(self) -> bool: ...

    def set_overlays_web_view(self, overlay: bool) -> Any: ...

    def set_style(self, style: StatusBarStyle) -> Any: ...


class WebBridge:
    """Bridge for a plain browser. Every status bar call is a no-op."""

    def is_native_platform(self) -> bool:
        return False

    def set_overlays_web_view(self, overlay: bool) -> None:
        pass

    def set_style(self, style: StatusBarStyle) -> None:
        pass


def configure_status_bar(bridge: NativeBridge) -> None:
    if not bridge.is_native_platform():
        return

    bridge.set_overlays_web_view(False)
    bridge.set_style(StatusBarStyle.LIGHT)


@dataclass
class AndroidConfig:
    allow_mixed_content: bool = False
    background_color: str = BRAND_COLOR


@dataclass
class IOSConfig:
    background_color: str = BRAND_COLOR
    content_inset: str = "always"
    scroll_enabled: bool = False


@dataclass
class ShellConfig:
    app_id: str = "si.workly.app"
    app_name: str = "Workly"
    web_dir: str = "out"
    server_url: str = "https://worklyprod.vercel.app"
    cleartext: bool = False
    android: AndroidConfig = field(default_factory=AndroidConfig)
    ios: IOSConfig = field(default_factory=IOSConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "appId": self.app_id,
            "appName": self.app_name,
            "webDir": self.web_dir,
            "server": {"url": self.server_url, "cleartext": self.cleartext},
            "android": {
                "allowMixedContent": self.android.allow_mixed_content,
                "backgroundColor": self.android.background_color,
            },
            "ios": {
                "backgroundColor": self.ios.background_color,
                "contentInset": self.ios.content_inset,
                "scrollEnabled": self.ios.scroll_enabled,
            },
        }

    def write(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n")
        logger.info(f"Wrote shell config to {path}")
        return path
