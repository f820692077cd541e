"""Shared data model primitives."""

from trestus.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
