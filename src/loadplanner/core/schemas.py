"""Validation schemas for item rows, container catalogs and options.

Raw mappings (from JSON / YAML files or API payloads) are validated here and
converted into the frozen dataclasses of ``core.models``.  The legacy
French field names are accepted as aliases, e.g.::

    {"longueur": 50, "largeur": 40, "hauteur": 30, "poids": 10,
     "quantite": 2, "fragile": false, "gerbable": true}
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from loadplanner.core.errors import ContainerPoolError, InvalidItemsError
from loadplanner.core.models import (
    Container,
    ContainerCategory,
    Dimensions,
    Item,
    SimulationOptions,
)

_FLAT_DIMENSION_KEYS = ("length", "width", "height", "longueur", "largeur", "hauteur")

_CATEGORY_ALIASES = {
    "truck": ContainerCategory.TRUCK,
    "camion": ContainerCategory.TRUCK,
    "shippingcontainer": ContainerCategory.SHIPPING_CONTAINER,
    "shipping_container": ContainerCategory.SHIPPING_CONTAINER,
    "container": ContainerCategory.SHIPPING_CONTAINER,
    "conteneur": ContainerCategory.SHIPPING_CONTAINER,
}


def parse_category(value: Any) -> ContainerCategory:
    """Map a category label (English or French) onto ``ContainerCategory``."""
    if isinstance(value, ContainerCategory):
        return value
    key = str(value).strip().lower()
    if key not in _CATEGORY_ALIASES:
        raise ValueError(
            f"Unknown container category: {value}. "
            f"Available: {[c.value for c in ContainerCategory]}"
        )
    return _CATEGORY_ALIASES[key]


class DimensionsSchema(BaseModel):
    """Bounding box in centimeters."""
    length: float = Field(gt=0, validation_alias=AliasChoices("length", "longueur"))
    width: float = Field(gt=0, validation_alias=AliasChoices("width", "largeur"))
    height: float = Field(gt=0, validation_alias=AliasChoices("height", "hauteur"))

    def to_model(self) -> Dimensions:
        return Dimensions(length=self.length, width=self.width, height=self.height)


class ItemSchema(BaseModel):
    """One item row. Dimensions may be nested or given as flat keys."""
    dimensions: DimensionsSchema
    weight: float = Field(default=0.0, ge=0, validation_alias=AliasChoices("weight", "poids"))
    quantity: int = Field(default=1, ge=1, validation_alias=AliasChoices("quantity", "quantite"))
    fragile: bool = False
    stackable: bool = Field(default=True, validation_alias=AliasChoices("stackable", "gerbable"))
    reference: str | None = Field(
        default=None, validation_alias=AliasChoices("reference", "ref", "id")
    )

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_dimensions(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "dimensions" not in data:
            dims = {k: data[k] for k in _FLAT_DIMENSION_KEYS if k in data}
            if dims:
                data = {k: v for k, v in data.items() if k not in dims}
                data["dimensions"] = dims
        return data

    @field_validator("weight", "quantity", "fragile", "stackable", mode="before")
    @classmethod
    def _missing_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default()
        return value

    @field_validator("reference", mode="before")
    @classmethod
    def _reference_as_str(cls, value: Any) -> Any:
        return None if value is None else str(value)

    def to_model(self) -> Item:
        return Item(
            dimensions=self.dimensions.to_model(),
            weight=self.weight,
            quantity=self.quantity,
            fragile=self.fragile,
            stackable=self.stackable,
            reference=self.reference,
        )


class ContainerSchema(BaseModel):
    """One container catalog entry."""
    id: str = Field(validation_alias=AliasChoices("id", "_id", "matricule"))
    dimensions: DimensionsSchema
    capacity_weight: float = Field(
        ge=0, validation_alias=AliasChoices("capacity_weight", "capacitePoids")
    )
    capacity_volume: float | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("capacity_volume", "volume")
    )
    category: ContainerCategory = Field(
        default=ContainerCategory.TRUCK, validation_alias=AliasChoices("category", "categorie")
    )
    available: bool = Field(default=True, validation_alias=AliasChoices("available", "disponible"))
    container_type: str = Field(default="", validation_alias=AliasChoices("type", "container_type"))

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return value if value is None else str(value)

    @field_validator("capacity_volume", mode="before")
    @classmethod
    def _zero_volume_is_derived(cls, value: Any) -> Any:
        # 0 or missing means "compute from dimensions"
        return None if not value else value

    @field_validator("category", mode="before")
    @classmethod
    def _category_alias(cls, value: Any) -> Any:
        return parse_category(value)

    def to_model(self) -> Container:
        return Container(
            id=self.id,
            dimensions=self.dimensions.to_model(),
            capacity_weight=self.capacity_weight,
            capacity_volume=self.capacity_volume,
            category=self.category,
            available=self.available,
            container_type=self.container_type,
        )


class SimulationOptionsSchema(BaseModel):
    force_container_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("force_container_ids", "forceUseContainers"),
    )
    preferred_categories: list[ContainerCategory] = Field(
        default_factory=list,
        validation_alias=AliasChoices("preferred_categories", "preferredCategories"),
    )

    @field_validator("force_container_ids", mode="before")
    @classmethod
    def _ids_as_str(cls, value: Any) -> Any:
        # entries may be bare ids or container documents
        if value is None:
            return []
        return [str(v.get("_id", v.get("id"))) if isinstance(v, Mapping) else str(v) for v in value]

    @field_validator("preferred_categories", mode="before")
    @classmethod
    def _categories_alias(cls, value: Any) -> Any:
        if value is None:
            return []
        return [parse_category(v) for v in value]

    def to_model(self) -> SimulationOptions:
        return SimulationOptions(
            force_container_ids=tuple(self.force_container_ids),
            preferred_categories=tuple(self.preferred_categories),
        )


def parse_items(rows: Iterable[Item | Mapping[str, Any]] | None) -> list[Item]:
    """
    Validate item rows.

    ``Item`` instances pass through untouched; mappings go through
    ``ItemSchema``.  An empty list is returned as-is: emptiness is an
    entry-point decision, not a schema error.

    Raises:
        InvalidItemsError: If ``rows`` is None or any row is malformed.
    """
    if rows is None:
        raise InvalidItemsError("item list is missing")
    items: list[Item] = []
    for idx, row in enumerate(rows):
        if isinstance(row, Item):
            items.append(row)
            continue
        try:
            items.append(ItemSchema.model_validate(row).to_model())
        except ValidationError as exc:
            raise InvalidItemsError(f"item #{idx} is invalid: {exc}") from exc
    return items


def parse_containers(rows: Iterable[Container | Mapping[str, Any]]) -> list[Container]:
    """
    Validate container catalog entries.

    Raises:
        ContainerPoolError: If any entry is malformed.
    """
    containers: list[Container] = []
    for idx, row in enumerate(rows):
        if isinstance(row, Container):
            containers.append(row)
            continue
        try:
            containers.append(ContainerSchema.model_validate(row).to_model())
        except ValidationError as exc:
            raise ContainerPoolError(f"container #{idx} is invalid: {exc}") from exc
    return containers


def parse_options(data: SimulationOptions | Mapping[str, Any] | None) -> SimulationOptions:
    if data is None:
        return SimulationOptions()
    if isinstance(data, SimulationOptions):
        return data
    try:
        return SimulationOptionsSchema.model_validate(data).to_model()
    except ValidationError as exc:
        raise InvalidItemsError(f"invalid simulation options: {exc}") from exc
