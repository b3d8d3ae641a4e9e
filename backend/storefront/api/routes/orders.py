"""Order Routes — submit an order form.

Invariants:
    - Incomplete forms answer 400 before any store access
    - 201 only after the transaction and the export both succeeded
"""

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import get_order_coordinator
from storefront.schemas.order import CommitResponse, OrderForm
from storefront.services.order_commit import OrderCommitCoordinator

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@router.post(
    "", response_model=CommitResponse, status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: OrderForm,
    coordinator: OrderCommitCoordinator = Depends(get_order_coordinator),
):
    """Persist the order lines, decrement stock and export the CSV."""
    result = await coordinator.commit_order(
        body.selected_products,
        body.quantities,
        body.cliente_nombre,
        body.cliente_email,
        body.cliente_direccion,
    )
    return CommitResponse(
        order_group_id=result.order_group_id,
        export_path=result.export_path,
        lines_committed=result.lines_committed,
        skipped=result.skipped,
        message="Order saved and CSV exported.",
    )
