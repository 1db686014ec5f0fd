"""
Bot 진입점

실행 방법:
    python -m bot
"""

from bot.bootstrap import run

if __name__ == "__main__":
    run()
