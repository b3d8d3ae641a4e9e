"""Order Schemas — order form body and commit response.

Invariants:
    - OrderForm is lenient on purpose: emptiness checks live in core/parse_order.py
      so the same rules apply to every caller, HTTP or not
    - selected_products accepts a single "id,name" string or a list of them

Design Decisions:
    - Quantities may arrive either as a `quantities` map or as flat
      `quantity_<id>` keys (the HTML form encoding); both are merged
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OrderForm(BaseModel):
    """Submitted order form."""

    selected_products: list[str] | str | None = Field(
        None, alias="selectedProducts",
    )
    quantities: dict[str, str | int | None] = Field(default_factory=dict)
    cliente_nombre: str | None = Field(None, alias="clienteNombre", max_length=200)
    cliente_email: str | None = Field(None, alias="clienteEmail", max_length=200)
    cliente_direccion: str | None = Field(
        None, alias="clienteDireccion", max_length=500,
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="after")
    def merge_flat_quantities(self):
        for key, value in (self.model_extra or {}).items():
            if key.startswith("quantity_"):
                self.quantities.setdefault(key[len("quantity_"):], value)
        return self


class CommitResponse(BaseModel):
    order_group_id: int
    export_path: str
    lines_committed: int
    skipped: list[str]
    message: str
