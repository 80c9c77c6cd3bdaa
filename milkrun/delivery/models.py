from pydantic import BaseModel
from milkrun.schema.full_schema import OrderStatus


class DeliveryStatusIn(BaseModel):
    status: OrderStatus
