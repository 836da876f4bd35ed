"""
Base model for registry records.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RegistryModel(BaseModel):
    """
    Registry record with camelCase aliases for external views.

    Fields are set and stored by their Python names; dump with
    ``by_alias=True`` for the external representation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
