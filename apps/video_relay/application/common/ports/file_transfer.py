"""File Transfer Port.

결과 영상 다운로드/검증/정리 인터페이스입니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class FileStats:
    """검증된 임시 파일 정보."""

    path: Path
    size: int


class FileTransferManager(Protocol):
    """파일 전송 인터페이스.

    호출 순서: download → validate → (사용) → cleanup.
    cleanup은 모든 종료 경로에서 호출되어야 합니다.

    구현체:
        - HttpFileTransferManager (infrastructure/file_transfer/)
    """

    async def download(self, source_url: str) -> Path:
        """URL을 임시 파일로 다운로드.

        Raises:
            DownloadError: 네트워크 오류, 비정상 응답, 타임아웃, 잘못된 URL
            FileTooLargeError: 전송 중 상한 초과 (부분 파일은 삭제됨)
        """
        ...

    async def validate(self, path: Path) -> FileStats:
        """파일 크기 검증.

        Raises:
            EmptyFileError: 크기 0
            FileTooLargeError: 상한 초과
        """
        ...

    def safe_name(self, source_url: str) -> str:
        """URL에서 업로드용 파일명 생성."""
        ...

    async def cleanup(self, path: Path) -> None:
        """임시 파일 삭제. 예외를 던지지 않습니다."""
        ...
