"""
그룹 지출 장부 (Ledger)

채팅 그룹별 지출 기록과 참여자 이름을 메모리에 보관.
프로세스 재시작 시 모든 데이터는 사라짐.

사용 예시:
```python
from core.ledger import InvalidAmountError, LedgerStore

store = LedgerStore()
store.record_name(chat_id, user_id, "alice")

try:
    store.append_expense(chat_id, user_id, "alice", "1500")
except InvalidAmountError:
    ...

snapshot = store.snapshot(chat_id)
```
"""

from core.ledger.store import LedgerStore
from core.ledger.types import (
    Entry,
    InvalidAmountError,
    Ledger,
    LedgerError,
    LedgerSnapshot,
    NoDataError,
)

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    # 데이터 구조
    "Entry",
    "Ledger",
    "LedgerSnapshot",
    # 예외
    "LedgerError",
    "InvalidAmountError",
    "NoDataError",
]
