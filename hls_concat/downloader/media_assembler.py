"""Asynchronous pipeline that fetches playlist segments and joins them in order."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from ..errors import EmptyPlaylist
from ..models import AssembledMedia, ParsedPlaylist, SegmentJob
from ..utils.http_client import HttpClient
from ..utils.url_utils import infer_extension, resolve_url

DEFAULT_WORKERS = 16
FALLBACK_EXTENSION = "ts"

JobList = List[SegmentJob]


class MediaAssembler:
    """Downloads segments concurrently and concatenates them by playlist position.

    At most ``workers`` fetches are in flight at once. The first failing fetch
    cancels the ones still pending and its error is raised unchanged.
    """

    def __init__(self, http_client: HttpClient, workers: int = DEFAULT_WORKERS) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers
        self._http_client = http_client

    def assemble(self, base_url: str, parsed: ParsedPlaylist) -> AssembledMedia:
        async def _run() -> AssembledMedia:
            try:
                return await self.assemble_async(base_url, parsed)
            finally:
                await self._http_client.aclose()

        return asyncio.run(_run())

    async def assemble_async(self, base_url: str, parsed: ParsedPlaylist) -> AssembledMedia:
        if not parsed.segment_uris:
            raise EmptyPlaylist()

        jobs = self.build_jobs(base_url, parsed)
        extension_hint = self._extension_hint(jobs)
        logging.info("Going to download %s segments with %s workers", len(jobs), self.workers)

        results = await self._download_segments(jobs)
        return AssembledMedia(
            data=self._merge_segments(jobs, results),
            extension_hint=extension_hint,
            segment_count=len(jobs),
        )

    def build_jobs(self, base_url: str, parsed: ParsedPlaylist) -> JobList:
        uris: List[str] = []
        if parsed.init_segment_uri:
            uris.append(parsed.init_segment_uri)
        uris.extend(parsed.segment_uris)
        return [SegmentJob(index=index, url=resolve_url(base_url, uri)) for index, uri in enumerate(uris)]

    def _extension_hint(self, jobs: JobList) -> str:
        if not jobs:
            return FALLBACK_EXTENSION
        return infer_extension(jobs[-1].url) or FALLBACK_EXTENSION

    async def _download_segments(self, jobs: JobList) -> Dict[int, bytes]:
        sem = asyncio.Semaphore(self.workers)
        tasks: Dict[asyncio.Task, int] = {
            asyncio.create_task(self._download_single(sem, job)): job.index for job in jobs
        }

        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            unfinished = [task for task in tasks if not task.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        first_error: Optional[BaseException] = None
        first_error_index = -1
        results: Dict[int, bytes] = {}
        for task in done:
            index = tasks[task]
            exc = task.exception()
            if exc is None:
                results[index] = task.result()
            elif first_error is None or index < first_error_index:
                first_error, first_error_index = exc, index

        if first_error is not None:
            logging.error(
                "Segment #%s failed, cancelled %s pending download(s): %s",
                first_error_index,
                len(pending),
                first_error,
            )
            raise first_error
        return results

    async def _download_single(self, sem: asyncio.Semaphore, job: SegmentJob) -> bytes:
        async with sem:
            data = await self._http_client.fetch_bytes(job.url)
        logging.debug("Downloaded segment #%s (%s bytes)", job.index, len(data))
        return data

    def _merge_segments(self, jobs: JobList, results: Dict[int, bytes]) -> bytes:
        ordered = [results[job.index] for job in sorted(jobs, key=lambda item: item.index)]
        logging.info("Merging %s segments", len(ordered))
        return b"".join(ordered)
