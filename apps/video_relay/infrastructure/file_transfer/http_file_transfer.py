"""HTTP File Transfer Manager.

FileTransferManager 포트의 httpx 구현체입니다.

- download: 스트리밍 다운로드, 전체 전송 시간 상한 (기본 30초)
- validate: 크기 0 / 업로드 상한 초과 검증
- safe_name: URL 경로 기반 업로드 파일명
- cleanup: 임시 파일 삭제 (실패해도 예외 없음)

임시 파일명은 호출마다 uuid prefix를 붙여 동시 처리 간 충돌하지 않습니다.
"""

from __future__ import annotations

import asyncio
import logging
import re
import tempfile
import time
import uuid
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

import aiofiles
import aiofiles.os
import httpx

from apps.video_relay.application.common.best_effort import run_best_effort
from apps.video_relay.application.common.exceptions import (
    DownloadError,
    EmptyFileError,
    FileTooLargeError,
)
from apps.video_relay.application.common.ports.file_transfer import FileStats
from apps.video_relay.setup.config import MAX_UPLOAD_BYTES

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
OUTPUT_EXTENSION = ".mp4"


class HttpFileTransferManager:
    """httpx 기반 파일 전송 매니저.

    Attributes:
        DEFAULT_TIMEOUT: 다운로드 전체 시간 상한 (초)
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        temp_dir: str | Path | None = None,
        max_bytes: int = MAX_UPLOAD_BYTES,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """초기화.

        Args:
            temp_dir: 임시 파일 디렉터리 (None이면 시스템 임시 디렉터리)
            max_bytes: 업로드 상한 (바이트)
            timeout: 다운로드 전체 시간 상한 (초)
            client: 주입할 HTTP 클라이언트 (테스트용)
        """
        self._temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
        self._max_bytes = max_bytes
        self._timeout = timeout
        self._client = client

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 lazy 초기화."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def download(self, source_url: str) -> Path:
        """URL을 임시 파일로 스트리밍 다운로드.

        실패 시 부분 파일은 삭제한 뒤 DownloadError를 던집니다.

        Args:
            source_url: 다운로드할 URL

        Returns:
            임시 파일 경로

        Raises:
            DownloadError: 네트워크 오류, 비정상 응답, 타임아웃, 잘못된 URL
            FileTooLargeError: 전송 중 업로드 상한 초과 (전송 중단)
        """
        client = await self._get_client()
        await aiofiles.os.makedirs(self._temp_dir, exist_ok=True)
        path = self._temp_dir / f"{uuid.uuid4().hex}_{self.safe_name(source_url)}"

        try:
            await asyncio.wait_for(
                self._stream_to_file(client, source_url, path),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            await self.cleanup(path)
            raise DownloadError(source_url, f"timed out after {self._timeout}s") from e
        except FileTooLargeError:
            await self.cleanup(path)
            raise
        except httpx.HTTPStatusError as e:
            await self.cleanup(path)
            raise DownloadError(source_url, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            await self.cleanup(path)
            raise DownloadError(source_url, str(e) or type(e).__name__) from e

        logger.debug(
            "File downloaded",
            extra={"url": source_url, "path": str(path)},
        )
        return path

    async def _stream_to_file(
        self,
        client: httpx.AsyncClient,
        source_url: str,
        path: Path,
    ) -> None:
        async with client.stream("GET", source_url) as response:
            response.raise_for_status()

            declared = response.headers.get("Content-Length")
            if declared is not None and declared.isdigit() and int(declared) > self._max_bytes:
                raise FileTooLargeError(int(declared), self._max_bytes)

            written = 0
            async with aiofiles.open(path, "wb") as f:
                async for chunk in response.aiter_bytes():
                    written += len(chunk)
                    # 상한 초과 즉시 중단
                    if written > self._max_bytes:
                        raise FileTooLargeError(written, self._max_bytes)
                    await f.write(chunk)

    async def validate(self, path: Path) -> FileStats:
        """파일 크기 검증.

        Raises:
            EmptyFileError: 크기 0
            FileTooLargeError: 업로드 상한 초과
        """
        stat = await aiofiles.os.stat(path)
        size = stat.st_size

        if size == 0:
            raise EmptyFileError()
        if size > self._max_bytes:
            raise FileTooLargeError(size, self._max_bytes)

        return FileStats(path=Path(path), size=size)

    def safe_name(self, source_url: str) -> str:
        """URL 경로 마지막 세그먼트로 업로드 파일명 생성.

        허용 문자 외에는 "_"로 치환하고, 쓸 수 있는 이름이 없으면
        타임스탬프 기반 이름을 사용합니다. 항상 ".mp4"가 붙습니다.

        Examples:
            http://x/out.mp4        -> out.mp4.mp4
            http://x/                -> video_1700000000000.mp4
        """
        try:
            raw = PurePosixPath(unquote(urlparse(source_url).path)).name
        except ValueError:
            raw = ""

        name = _UNSAFE_CHARS.sub("_", raw).strip("._")
        if not name:
            name = f"video_{int(time.time() * 1000)}"

        return f"{name}{OUTPUT_EXTENSION}"

    async def cleanup(self, path: Path) -> None:
        """임시 파일 삭제. 실패는 로그로만 남깁니다."""
        if not await aiofiles.os.path.exists(path):
            return
        await run_best_effort("cleanup", aiofiles.os.remove(path), path=str(path))
