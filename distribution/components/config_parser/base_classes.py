import logging
import os
from dataclasses import MISSING, fields, is_dataclass
from typing import Any, Optional, get_args, get_origin

from ..logs import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


def _convert(field_type: Any, value: Any) -> Any:
    if is_dataclass(field_type):
        return field_type(value)

    if get_origin(field_type) is list:
        if not isinstance(value, list):
            raise TypeError(f"Expected a list, got {type(value).__name__}")

        (item_type,) = get_args(field_type) or (None,)
        if item_type is None:
            return list(value)
        return [_convert(item_type, item) for item in value]

    if field_type is str and value is None:
        return ""

    return field_type(value)


def _export(value: Any) -> Any:
    if is_dataclass(value):
        return value.as_dict()
    if isinstance(value, list):
        return [_export(item) for item in value]
    return value


class ExplicitParams:
    def __init__(self, data: Optional[dict] = None):
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise TypeError(f"{self.__class__.__name__} expects a mapping, got {type(data)}")

        for f in fields(self):
            if f.name not in data:
                continue

            setattr(self, f.name, _convert(f.type, data[f.name]))

        self.post_init()

    def post_init(self):
        pass

    def as_dict(self):
        result = {}
        for f in fields(self):
            if not hasattr(self, f.name):
                continue

            result[f.name] = _export(getattr(self, f.name))
        return result

    def set_attribute_from_env(self, attribute: str, env_var: str) -> bool:
        """
        Set the value of an attribute from an environment variable.
        """
        cls_name = self.__class__.__name__
        if not hasattr(self, attribute):
            raise AttributeError(f"{cls_name} has no attribute '{attribute}'")

        if value := os.getenv(env_var):
            setattr(self, attribute, value)
            logger.debug(f"{env_var} key loaded to {cls_name}.{attribute}")

            return True
        else:
            if getattr(self, attribute) in ("None", None):
                raise AttributeError(f"{cls_name}.{attribute} not set and {env_var} key not found.")
            else:
                logger.debug(f"{env_var} key not found, using value for {cls_name}.{attribute}")
            return False

    @classmethod
    def verify(cls, data: dict) -> bool:
        instance = cls(data)

        for field in fields(instance):
            if not hasattr(instance, field.name):
                raise KeyError(f"Missing required field: {cls.__name__}.{field.name}")

            if is_dataclass(field.type):
                field.type.verify(data[field.name])

            if get_origin(field.type) is list:
                item_type = next(iter(get_args(field.type)), None)
                if is_dataclass(item_type):
                    for item in data.get(field.name, []):
                        item_type.verify(item)

        return True

    @classmethod
    def generate(cls) -> dict:
        result = {}
        for field in fields(cls):
            default = getattr(cls, field.name, MISSING)

            if is_dataclass(field.type):
                result[field.name] = field.type.generate()
            elif get_origin(field.type) is list:
                item_type = next(iter(get_args(field.type)), None)
                result[field.name] = [item_type.generate()] if is_dataclass(item_type) else []
            elif default is not MISSING:
                result[field.name] = default
            else:
                result[field.name] = field.type()
        return result

    def __repr__(self):
        key_pair_string: str = ", ".join([f"{key}={value}" for key, value in vars(self).items()])
        return f"{self.__class__.__name__}({key_pair_string})"
