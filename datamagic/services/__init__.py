from .data_magic import DataMagic
from .factory import make_data_magic

__all__ = ["DataMagic", "make_data_magic"]
