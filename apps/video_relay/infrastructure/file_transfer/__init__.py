"""파일 전송."""

from apps.video_relay.infrastructure.file_transfer.http_file_transfer import (
    HttpFileTransferManager,
)

__all__ = ["HttpFileTransferManager"]
