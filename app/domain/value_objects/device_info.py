"""Device context captured when a session is issued"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

from ..enums import DeviceType, Platform


@dataclass(frozen=True)
class DeviceInfo:
    device_type: DeviceType = DeviceType.UNKNOWN
    platform: Platform = Platform.WEB
    app_version: Optional[str] = None
    os_version: Optional[str] = None
    device_model: Optional[str] = None

    @classmethod
    def from_raw(cls, device_type: Optional[str] = None, platform: Optional[str] = None, **extra) -> "DeviceInfo":
        """Build from loosely typed client input, mapping unknown values to defaults."""
        try:
            parsed_type = DeviceType(device_type) if device_type else DeviceType.UNKNOWN
        except ValueError:
            parsed_type = DeviceType.UNKNOWN
        try:
            parsed_platform = Platform(platform) if platform else Platform.WEB
        except ValueError:
            parsed_platform = Platform.OTHER
        return cls(
            device_type=parsed_type,
            platform=parsed_platform,
            app_version=extra.get("app_version"),
            os_version=extra.get("os_version"),
            device_model=extra.get("device_model"),
        )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DeviceInfo":
        data = data or {}
        return cls.from_raw(**data)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["device_type"] = self.device_type.value
        data["platform"] = self.platform.value
        return data
