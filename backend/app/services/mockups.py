import logging
import os
import re
import tempfile
import uuid
from urllib.parse import quote

from google.cloud.storage import Bucket
from playwright.async_api import async_playwright
from starlette.concurrency import run_in_threadpool

from app.core.errors import InternalError

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--disable-extensions",
]


def safe_file_name(company_name: str) -> str:
    slug = re.sub(r"[^a-z0-9]", "-", (company_name or "").lower())
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug or "mockup"


def storage_download_url(bucket_name: str, destination: str, download_token: str) -> str:
    return (
        f"https://firebasestorage.googleapis.com/v0/b/{bucket_name}/o/"
        f"{quote(destination, safe='')}?alt=media&token={download_token}"
    )


class MockupRenderer:
    """Screenshots an HTML page with headless Chromium."""

    def __init__(self, *, width: int = 1280, height: int = 720, launch_args: list[str] | None = None):
        self.viewport = {"width": width, "height": height}
        self.launch_args = CHROMIUM_ARGS if launch_args is None else launch_args

    async def screenshot(self, html: str, path: str) -> None:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=self.launch_args)
            try:
                page = await browser.new_page(viewport=self.viewport)
                await page.set_content(html, wait_until="networkidle")
                await page.screenshot(path=path, full_page=True)
            finally:
                await browser.close()


class MockupPublisher:
    """Renders a mockup page to PNG and uploads it to Firebase Storage."""

    def __init__(self, renderer: MockupRenderer, bucket: Bucket | None):
        self.renderer = renderer
        self.bucket = bucket

    def _upload(self, local_path: str, destination: str, download_token: str) -> None:
        blob = self.bucket.blob(destination)
        blob.metadata = {"firebaseStorageDownloadTokens": download_token}
        blob.upload_from_filename(local_path, content_type="image/png")

    async def publish(self, html: str, *, company_name: str, quote_id: str) -> str:
        """Return the public download URL of the uploaded screenshot."""
        if self.bucket is None:
            raise InternalError("Firebase Storage bucket is not configured", error="Failed to generate mockup")

        file_name = safe_file_name(company_name)
        fd, local_path = tempfile.mkstemp(prefix=f"{file_name}-", suffix=".png")
        os.close(fd)
        try:
            await self.renderer.screenshot(html, local_path)
            destination = f"mockups/{quote_id}/{file_name}.png"
            download_token = str(uuid.uuid4())
            await run_in_threadpool(self._upload, local_path, destination, download_token)
        finally:
            try:
                os.remove(local_path)
            except OSError as exc:
                logger.warning("Could not delete temporary mockup %s: %s", local_path, exc)

        url = storage_download_url(self.bucket.name, destination, download_token)
        logger.info("Mockup for quote %s uploaded to %s", quote_id, destination)
        return url
