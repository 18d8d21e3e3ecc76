"""Presentation Layer.

- ConsumerAdapter: 완료 이벤트 decode, 검증, Command 디스패칭, ack
- ChatEventHandler: 채팅 플랫폼 이벤트(설정 명령, 첨부) → Command 호출
"""
