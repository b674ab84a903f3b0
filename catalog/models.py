# catalog/models.py
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt


class Product(BaseModel):
    """A catalog entry: typed core fields plus whatever else the client sent."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    price: Union[StrictInt, StrictFloat]

    @property
    def extras(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})
