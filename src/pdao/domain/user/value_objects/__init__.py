from pdao.domain.user.value_objects.address import Address, Coordinates
from pdao.domain.user.value_objects.identifiers import (
    generate_form_id,
    generate_user_id,
)

__all__ = [
    "Address",
    "Coordinates",
    "generate_form_id",
    "generate_user_id",
]
