from collections.abc import Mapping

from servible.rendering.registry import get_block_type
from .exceptions import InvariantViolation


def _is_blank(value):
    return value is None or value == "" or value == [] or value == {}


def assert_block(block, index):
    if not isinstance(block, Mapping):
        raise InvariantViolation(f"Block {index} must be an object.")

    block_id = block.get("id")
    if not isinstance(block_id, str) or not block_id:
        raise InvariantViolation(f"Block {index} is missing an id.")

    block_type = get_block_type(block.get("type"))
    if block_type is None:
        raise InvariantViolation(f"Block {block_id} has unknown type {block.get('type')!r}.")

    data = block.get("data")
    if not isinstance(data, Mapping):
        raise InvariantViolation(f"Block {block_id} data must be an object.")

    missing = [field for field in block_type.required if _is_blank(data.get(field))]
    if missing:
        raise InvariantViolation(
            f"{block_type.name} block {block_id} is missing required fields: {', '.join(missing)}"
        )

    variant = data.get("variant")
    if variant is not None and block_type.variants and variant not in block_type.variants:
        raise InvariantViolation(
            f"{block_type.name} block {block_id} has unsupported variant {variant!r}."
        )
