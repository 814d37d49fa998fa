"""Build target: the platform/architecture pair every derived path is keyed on."""

from enum import Enum
from typing import NamedTuple


class Platform(str, Enum):
    HOST = "host"
    ANDROID = "android"


class Architecture(str, Enum):
    HOST = "host"
    ARMEABI = "armeabi"


# ABI names the NDK toolchain file expects. Directory segments keep the
# Architecture value, so the on-disk name and the ABI name differ.
ANDROID_ABIS = {
    Architecture.ARMEABI: "armeabi-v7a",
}


class BuildTarget(NamedTuple):
    platform: Platform = Platform.HOST
    architecture: Architecture = Architecture.HOST
    is_deploy: bool = False

    @classmethod
    def for_platform(cls, name: str | None = None) -> "BuildTarget":
        if name and name.strip().lower() == Platform.ANDROID.value:
            return cls(Platform.ANDROID, Architecture.ARMEABI)
        return cls(Platform.HOST, Architecture.HOST)

    @property
    def is_android(self) -> bool:
        return self.platform is Platform.ANDROID

    @property
    def is_desktop(self) -> bool:
        return self.platform is Platform.HOST
