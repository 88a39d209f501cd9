"""
Template adapter: download a GitHub repository snapshot and unpack it.

Fetches ``https://github.com/<slug>/archive/<ref>.tar.gz`` (no git
history, no cache) and extracts it into the destination with the
archive's top-level ``<repo>-<ref>/`` directory stripped.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
import time
import urllib.error
import urllib.request
from pathlib import Path, PurePosixPath

from chico.adapters.base import Adapter, ExecutionContext
from chico.core.models.action import Receipt

logger = logging.getLogger(__name__)

ARCHIVE_URL = "https://github.com/{slug}/archive/{ref}.tar.gz"

_USER_AGENT = "create-chico-app/1.0"


def archive_url(slug: str, ref: str) -> str:
    """Tarball URL for ``slug`` at ``ref`` (branch, tag or commit)."""
    return ARCHIVE_URL.format(slug=slug.strip("/"), ref=ref)


class TemplateAdapter(Adapter):
    """Download and unpack template repositories.

    Action params:
        slug (str): ``owner/repo`` on GitHub.
        ref (str): Branch, tag or commit (default: 'master').
        destination (str): Target directory (relative to working_dir or absolute).
        force (bool): Unpack into a non-empty destination (default: False).
        url (str): Explicit archive URL, overrides slug/ref.
        timeout (int): Download timeout in seconds (default: 30).
    """

    @property
    def name(self) -> str:
        return "template"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        if not params.get("slug") and not params.get("url"):
            return False, "Missing required param: 'slug' or 'url'"
        if not params.get("destination"):
            return False, "Missing required param: 'destination'"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        url = params.get("url") or archive_url(params["slug"], params.get("ref", "master"))
        timeout = params.get("timeout", 30)
        force = params.get("force", False)

        dest = Path(params["destination"])
        if not dest.is_absolute():
            dest = Path(context.working_dir) / dest

        if dest.exists() and not dest.is_dir():
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Destination is not a directory: {dest}",
            )
        if dest.is_dir() and any(dest.iterdir()) and not force:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Destination {dest} is not empty",
                metadata={"destination": str(dest)},
            )

        start = time.monotonic()
        with tempfile.TemporaryDirectory(prefix="chico-") as tmp:
            archive = Path(tmp) / "template.tar.gz"
            try:
                self._download(url, archive, timeout)
            except urllib.error.HTTPError as e:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Download failed: HTTP {e.code} for {url}",
                    metadata={"url": url},
                )
            except (urllib.error.URLError, OSError, ValueError) as e:
                reason = getattr(e, "reason", e)
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Download failed: {reason}",
                    metadata={"url": url},
                )

            try:
                count = self._extract(archive, dest)
            except (tarfile.TarError, OSError, ValueError) as e:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Could not unpack template: {e}",
                    metadata={"url": url},
                )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Extracted {count} entries into {dest}",
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata={"url": url, "destination": str(dest), "entries": count},
        )

    # ── Helpers ─────────────────────────────────────────────────

    def _download(self, url: str, target: Path, timeout: int) -> None:
        logger.debug("Downloading %s", url)
        req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
        with urllib.request.urlopen(req, timeout=timeout) as resp, open(target, "wb") as f:
            shutil.copyfileobj(resp, f)

    def _extract(self, archive: Path, dest: Path) -> int:
        """Unpack ``archive`` into ``dest`` minus its first path component."""
        dest.mkdir(parents=True, exist_ok=True)
        root = dest.resolve()
        count = 0
        with tarfile.open(archive, "r:*") as tar:
            for member in tar.getmembers():
                parts = PurePosixPath(member.name).parts[1:]
                if not parts:
                    continue  # the top-level directory itself
                if member.issym() or member.islnk():
                    logger.warning("Template link not copied: %s -> %s", member.name, member.linkname)
                    continue
                target = (root / Path(*parts)).resolve()
                if not target.is_relative_to(root):
                    raise ValueError(f"Archive member escapes destination: {member.name}")
                member.name = "/".join(parts)
                tar.extract(member, root, filter="data")
                count += 1
        logger.info("Unpacked %d entries into %s", count, dest)
        return count
