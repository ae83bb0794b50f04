from pydantic import BaseModel, ConfigDict


class Part(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    part_no: str
    part_name: str = ""
    location: str = ""  # empty = unassigned
    on_hand: float = 0.0
    due_in: float = 0.0
    on_order: float = 0.0
    amd3: float = 0.0  # 3-month average demand
    mav: float = 0.0  # value metric
    stk_eff: float = 0.0  # stock efficiency %
    sys_gen_stock: float = 0.0  # system-suggested stock level

    @property
    def key(self) -> str:
        """Case-normalized lookup key."""
        return self.part_no.strip().upper()

    @property
    def upcoming_stock(self) -> float:
        return self.due_in + self.on_order

    @property
    def total_available(self) -> float:
        return self.on_hand + self.due_in + self.on_order
