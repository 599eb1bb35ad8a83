# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 13:40:02
# @Author : Kariko Lin


class InvalidConfigurationError(Exception):
    """Raised when a document cannot be read as a configuration.

    Malformed YAML, a top level that is not a mapping, exceeded parser
    limits and failed typed deserialization all end up here.
    """
    pass


class OrphanedSectionError(RuntimeError):
    """A section was detached from its tree and cannot be written anymore."""
    pass


class SerializationError(ValueError):
    """Typed object could not be (de)serialized through the registry."""
    pass
