"""Video Relay.

채팅 플랫폼과 영상 처리 백엔드 사이에서 작업 제출/결과 전달을 중계하는 워커입니다.
"""
