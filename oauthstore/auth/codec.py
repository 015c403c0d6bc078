"""Entity codec between OAuth entities and store records.

Records use the stored field names (model aliases). The entity's identifier
attribute is stored under the store primary key ``_id``; an absent identifier
is left out so the store assigns one.
"""

import json
import logging
from typing import Any, TypeVar

from oauthstore.core.constants import ID_NAME

from .models import StoredEntity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StoredEntity)


def stored_name(model: type[StoredEntity], attribute: str) -> str:
    """Stored field name for a model attribute."""
    field = model.model_fields[attribute]
    return field.alias or attribute


def encode(entity: StoredEntity) -> dict[str, Any]:
    """Convert an entity into a store record.

    Args:
        entity: The entity to encode

    Returns:
        Record keyed by stored field names
    """
    model = type(entity)
    record = entity.model_dump(by_alias=True, mode="json")

    identifier = record.pop(stored_name(model, model.id_field), None)
    if identifier is not None:
        record[ID_NAME] = identifier

    return record


def decode(model: type[E], record: dict[str, Any]) -> E:
    """Convert a store record into an entity.

    List- or map-shaped values of the model's flatten_fields are serialized to
    a JSON string, since the entity exposes them as scalars.

    Args:
        model: Entity class to build
        record: Record as returned by the store

    Returns:
        The decoded entity
    """
    data = dict(record)

    identifier = data.pop(ID_NAME, None)
    if identifier is not None:
        data[stored_name(model, model.id_field)] = str(identifier)

    for attribute in model.flatten_fields:
        key = stored_name(model, attribute)
        if isinstance(data.get(key), list | tuple | dict):
            data[key] = json.dumps(data[key])

    return model.model_validate(data)
