"""Transform steps for zipstrict."""

from zipstrict.transforms.data_ops import Map, Zip

__all__ = ["Map", "Zip"]
