"""Data models for pr-graph."""

from models.config_models import Config
from models.data_models import ChangeRequest, Credential, DeviceCode, RemoteDescriptor

__all__ = [
    "Config",
    "ChangeRequest",
    "Credential",
    "DeviceCode",
    "RemoteDescriptor",
]
