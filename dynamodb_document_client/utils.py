"""
Record marshalling utilities.

Conversion between native Python values and DynamoDB records (attribute-value
maps) sits on top of boto3's TypeSerializer/TypeDeserializer. This module only
prepares values boto3 would otherwise reject and decides where decoded data
lands:

- Floats become Decimal, datetimes ISO strings, enums their value
- Integral numbers come back as int, fractional ones as Decimal
- Binary values come back as plain bytes
- Decoding can target a dict, a pydantic model instance or a pydantic model class
"""

import logging
from collections.abc import Mapping, MutableMapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Type, TypeVar, Union

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError, EncodeError, InvalidArgumentError

logger = logging.getLogger(__name__)

Record = Dict[str, Dict[str, Any]]
DecodeTarget = Union[MutableMapping, BaseModel, Type[BaseModel]]

M = TypeVar("M", bound=BaseModel)


class NativeTypeDeserializer(TypeDeserializer):
    """Deserializer returning int for integral numbers and bytes for binaries.

    Fractional numbers stay Decimal so every stored digit survives the read.
    """

    def _deserialize_n(self, value: str) -> Union[int, Decimal]:
        number = Decimal(value)
        if number == number.to_integral_value():
            return int(number)
        return number

    def _deserialize_b(self, value: Any) -> bytes:
        return bytes(value)


_serializer = TypeSerializer()
_deserializer = NativeTypeDeserializer()


# =============================================================================
# Marshalling (native -> record)
# =============================================================================

def _to_storable(value: Any) -> Any:
    """Rewrite a native value into types TypeSerializer accepts."""
    if isinstance(value, BaseModel):
        return _to_storable(value.model_dump(exclude_none=True))
    if isinstance(value, Enum):
        return _to_storable(value.value)
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: _to_storable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_storable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {_to_storable(v) for v in value}
    return value


def marshal_item(value: Union[Mapping, BaseModel]) -> Record:
    """Convert a mapping or pydantic model into a DynamoDB record.

    Args:
        value: Native item, e.g. ``{'id': 'w1', 'qty': 5}``

    Returns:
        Record in attribute-value form, e.g. ``{'id': {'S': 'w1'}, 'qty': {'N': '5'}}``

    Raises:
        EncodeError: If the value is not a mapping/model or holds an unsupported value
    """
    if not isinstance(value, (Mapping, BaseModel)):
        raise EncodeError(f"Cannot marshal {type(value).__name__} into a record; expected a mapping or pydantic model")

    try:
        storable = _to_storable(value)
        return {str(name): _serializer.serialize(attr) for name, attr in storable.items()}
    except (TypeError, ValueError, ArithmeticError) as e:
        logger.error(f"Failed to marshal item: {e}")
        raise EncodeError(f"Failed to marshal item: {e}", e) from e


def marshal_value(value: Any) -> Dict[str, Any]:
    """Convert a single native value into an attribute value.

    Raises:
        EncodeError: If the value has no DynamoDB representation
    """
    try:
        return _serializer.serialize(_to_storable(value))
    except (TypeError, ValueError, ArithmeticError) as e:
        raise EncodeError(f"Failed to marshal value {value!r}: {e}", e) from e


# =============================================================================
# Unmarshalling (record -> native)
# =============================================================================

def unmarshal_item(record: Mapping) -> Dict[str, Any]:
    """Convert a DynamoDB record into a plain dict of native values.

    Raises:
        DecodeError: If an attribute value is malformed
    """
    try:
        return {name: _deserializer.deserialize(attr) for name, attr in record.items()}
    except (TypeError, ValueError, AttributeError, ArithmeticError) as e:
        logger.error(f"Failed to unmarshal record: {e}")
        raise DecodeError(f"Failed to unmarshal record: {e}", original_error=e) from e


def check_decode_target(target: Any) -> None:
    """Ensure ``target`` can receive a decoded record.

    Accepted targets are mutable mappings (filled in place), mutable pydantic
    model instances (fields assigned in place) and pydantic model classes
    (a new instance is built).

    Raises:
        InvalidArgumentError: If the target is none of the above
    """
    if isinstance(target, type):
        if issubclass(target, BaseModel):
            return
    elif isinstance(target, BaseModel):
        if not target.model_config.get('frozen'):
            return
        raise InvalidArgumentError(
            f"Decode target {type(target).__name__} is frozen and cannot receive a record",
            argument='target'
        )
    elif isinstance(target, MutableMapping):
        return

    raise InvalidArgumentError(
        f"Decode target must be a mutable mapping or pydantic model, got {type(target).__name__}",
        argument='target'
    )


def _validate(model_class: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model_class.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"Record does not fit {model_class.__name__}: {e}")
        raise DecodeError(
            f"Record does not fit {model_class.__name__}: {e}",
            target=model_class.__name__,
            original_error=e
        ) from e


def unmarshal_into(record: Mapping, target: DecodeTarget) -> Any:
    """Decode a record into ``target``.

    Nothing is written to the target unless decoding succeeds as a whole.

    Args:
        record: DynamoDB record in attribute-value form
        target: Mutable mapping, pydantic model instance or pydantic model class

    Returns:
        The filled target, or a new model instance when a class was given

    Raises:
        InvalidArgumentError: If the target cannot receive a record
        DecodeError: If the record does not fit the target
    """
    check_decode_target(target)
    data = unmarshal_item(record)

    if isinstance(target, type):
        return _validate(target, data)

    if isinstance(target, BaseModel):
        decoded = _validate(type(target), data)
        for name in type(target).model_fields:
            setattr(target, name, getattr(decoded, name))
        return target

    target.clear()
    target.update(data)
    return target
