from .templates import FieldOptions, FieldTemplate, StringOptions

__all__ = ["FieldOptions", "FieldTemplate", "StringOptions"]
