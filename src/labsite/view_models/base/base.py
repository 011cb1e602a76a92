from humps import camelize

from pydantic import BaseModel as PydanticBaseModel
from pydantic import field_validator


class CamelModel(PydanticBaseModel):
    """
    A model with camelCase aliases and no field validators of its own. Models carrying a tagged-union
    discriminator use this base, since pydantic rejects a before-validator on a discriminator field.
    """

    class Config:
        alias_generator = camelize
        populate_by_name = True


class BaseModel(CamelModel):
    @field_validator("*", mode="before")
    def empty_str_to_none(cls, x):
        """
        Convert empty and whitespace-only strings to None. Runs before every other validator.

        :param x: The attribute value
        :return: None if x is blank, otherwise x
        """
        if isinstance(x, str) and x.strip() == "":
            return None
        return x
