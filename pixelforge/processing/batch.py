# Background and batch rendering
import concurrent.futures
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..config import settings
from ..utils.errors import RenderError
from ..utils.logger import get_logger
from .adjustments import AdjustmentState
from .filters import FilterPreset
from .renderer import OutputOptions, RenderResult, render

logger = get_logger(__name__)


@dataclass
class BatchRenderOutcome:
    """Tagged result of one render in a batch: either ``result`` or ``error`` is set."""
    source: Any
    success: bool
    result: Optional[RenderResult] = None
    error: Optional[RenderError] = None


def submit_render(
    executor: concurrent.futures.Executor,
    source,
    adjustments: Optional[AdjustmentState] = None,
    filter_preset: Optional[FilterPreset] = None,
    options: Optional[OutputOptions] = None,
) -> concurrent.futures.Future:
    """Schedule one render on ``executor`` and return its Future.

    The render releases its resources even if the caller never collects the result.
    """
    return executor.submit(render, source, adjustments, filter_preset, options)


def render_batch(
    sources: Sequence[Any],
    adjustments: Optional[AdjustmentState] = None,
    filter_preset: Optional[FilterPreset] = None,
    options: Optional[OutputOptions] = None,
    max_workers: Optional[int] = None,
) -> List[BatchRenderOutcome]:
    """Render several sources in parallel with the same settings.

    Uses a ThreadPoolExecutor: decoding, cv2 and encoding release the GIL,
    and every render owns its own buffers. A failed render does not stop
    the others and nothing is retried; unexpected exceptions are wrapped in
    RenderError.

    Args:
        sources (list): Paths, bytes, file objects or arrays to render.
        adjustments (AdjustmentState): Slider values shared by every render.
        filter_preset (FilterPreset): Filter shared by every render, or None.
        options (OutputOptions): Output settings shared by every render.
        max_workers (int): Thread count; defaults to ``settings.BATCH_MAX_WORKERS``.

    Returns:
        list: One BatchRenderOutcome per source, in input order.
    """
    if not sources:
        return []

    workers = max(1, min(max_workers or settings.BATCH_MAX_WORKERS, len(sources)))
    outcomes: List[Optional[BatchRenderOutcome]] = [None] * len(sources)

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_index = {
            submit_render(executor, source, adjustments, filter_preset, options): index
            for index, source in enumerate(sources)
        }

        processed_count = 0
        total = len(sources)
        for future in concurrent.futures.as_completed(future_to_index):
            index = future_to_index[future]
            source = sources[index]
            processed_count += 1
            try:
                result = future.result()
            except RenderError as e:
                logger.warning("(%d/%d) Render failed for %s: %s", processed_count, total, source, e)
                outcomes[index] = BatchRenderOutcome(source=source, success=False, error=e)
                continue
            except Exception as e:
                logger.exception("(%d/%d) Unexpected error rendering %s", processed_count, total, source)
                error = RenderError(
                    f"Unexpected error rendering source #{index}: {e}",
                    original_error=e,
                    user_message="The image could not be rendered.",
                )
                outcomes[index] = BatchRenderOutcome(source=source, success=False, error=error)
                continue
            logger.info("(%d/%d) Rendered %s", processed_count, total, result.path or source)
            outcomes[index] = BatchRenderOutcome(source=source, success=True, result=result)

    return outcomes
