"""
정산 (Settlement) 엔진

Ledger 스냅샷 → 참여자 잔액 → 최소 이체 목록 (Greedy).

사용 예시:
```python
from core.settlement import settle

report = settle(store.snapshot(chat_id))
for t in report.transfers:
    print(f"{t.from_name} → {t.to_name}: {t.amount}")
```
"""

from core.settlement.engine import EPSILON, compute_balances, settle, settle_totals
from core.settlement.types import SettlementReport, Transfer

__all__ = [
    "EPSILON",
    "SettlementReport",
    "Transfer",
    "compute_balances",
    "settle",
    "settle_totals",
]
