"""
명령어 파서

채팅 텍스트 → (명령어, 인자) 분리.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedCommand:
    """파싱된 명령어

    Attributes:
        name: 슬래시와 @botname을 제거한 소문자 명령어 (예: "add")
        args: 공백 기준 인자 목록
    """

    name: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def first_arg(self) -> str | None:
        """첫 번째 인자 (없으면 None)"""
        return self.args[0] if self.args else None


def parse_command(text: str) -> ParsedCommand | None:
    """채팅 텍스트 파싱

    - 앞뒤 공백 제거 후 소문자 변환
    - "/"로 시작하지 않으면 명령어가 아님
    - 그룹 채팅의 "/add@my_bot 100" 형식 지원

    Args:
        text: 수신 메시지 본문

    Returns:
        ParsedCommand, 명령어가 아니면 None
    """
    normalized = text.strip().lower()
    if not normalized.startswith("/"):
        return None

    parts = normalized.split()
    head = parts[0][1:]
    name = head.split("@", 1)[0]
    if not name:
        return None

    return ParsedCommand(name=name, args=tuple(parts[1:]))
