from typing import Annotated

from fastapi import Depends, Request

from datamagic.config import Settings, get_cached_settings
from datamagic.services.data_magic import DataMagic


def get_data_magic(request: Request) -> DataMagic:
    """Get the shared DataMagic service from app state."""
    return request.app.state.data_magic


SettingsDep = Annotated[Settings, Depends(get_cached_settings)]
DataMagicDep = Annotated[DataMagic, Depends(get_data_magic)]
