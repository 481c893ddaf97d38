"""
Core layer: 설정 + 리스너.

역할:
- default.yaml / 환경 변수 → Settings
- SOCKET / PORT → 리스너 소켓
"""

from .config import Settings, load_config, load_settings
from .listener import ListenerSpec, open_listener, resolve_listener

__all__ = [
    # config
    "Settings",
    "load_config",
    "load_settings",
    # listener
    "ListenerSpec",
    "resolve_listener",
    "open_listener",
]
