from scanotron.cache.pattern_cache import PatternCache
from scanotron.config.settings import Settings
from scanotron.logging.logger import Log
from scanotron.parsing.exceptions import OutputParseError
from scanotron.pipeline.exceptions import InputNotFoundError, StageFailedError
from scanotron.pipeline.models import PipelineContext, PipelineRequest, PipelineState
from scanotron.pipeline.steps import (
    CacheLookupStep,
    ExtractPatternStep,
    PersistPatternStep,
    PipelineStep,
    ResolveOutputDirStep,
    SplitDocumentStep,
)
from scanotron.reporting.base import BaseReportSink
from scanotron.tools.exceptions import ToolError
from scanotron.tools.locator import ExecutableLocator, build_locator
from scanotron.tools.runner import ProcessRunner


class PipelineController:
    """Runs the extraction and split stages for one document.

    Pipeline: resolve output dir -> cache lookup -> extract (unless cached)
    -> persist pattern -> split. Every outcome, including unexpected errors,
    is reported through the sink and mapped to an exit code.
    """

    def __init__(self, steps: list[PipelineStep], report: BaseReportSink) -> None:
        self._steps = steps
        self._report = report

    def run(self, request: PipelineRequest) -> int:
        """Execute the pipeline and return the process exit code."""
        try:
            self._validate(request)
        except InputNotFoundError as exc:
            self._report.error(str(exc))
            return 1

        context = PipelineContext(request=request)
        try:
            for step in self._steps:
                Log.debug(f"Running {type(step).__name__} (state={context.state.value})")
                context = step.run(context)
        except StageFailedError as exc:
            self._fail(context, str(exc), {"exitCode": exc.exit_code, "error": exc.stderr})
        except (ToolError, OutputParseError) as exc:
            self._fail(context, str(exc), {"exception": type(exc).__name__})
        except Exception as exc:
            self._fail(
                context,
                f"Error processing the PDF file: {exc}",
                {"exception": type(exc).__name__, "message": str(exc)},
            )
        else:
            context.state = PipelineState.SUCCESS
            self._report.summary("Processing Complete", self._summary_payload(context))
            return 0
        return 1

    def _fail(self, context: PipelineContext, message: str, payload: dict[str, object]) -> None:
        failed_state = context.state
        context.state = PipelineState.FAILURE
        Log.error(f"Pipeline failed during {failed_state.value}: {message}")
        self._report.error(message, {**payload, "stage": failed_state.value})
        self._report.summary("Processing Failed", self._summary_payload(context))

    @staticmethod
    def _validate(request: PipelineRequest) -> None:
        if not request.document.is_file():
            raise InputNotFoundError(f"The file '{request.document}' was not found.")

    @staticmethod
    def _summary_payload(context: PipelineContext) -> dict[str, object]:
        outcome = context.split_outcome
        return {
            "Input PDF": str(context.request.document),
            "Pattern": context.pattern,
            "Output Directory": str(context.output_dir) if context.output_dir else None,
            "Total Pages": outcome.total_pages if outcome else None,
            "Files Created": outcome.files_created if outcome else 0,
        }


def build_controller(
    settings: Settings,
    report: BaseReportSink,
    locator: ExecutableLocator | None = None,
    runner: ProcessRunner | None = None,
) -> PipelineController:
    """Build a PipelineController with all steps wired from settings."""
    locator = locator or build_locator(settings)
    runner = runner or ProcessRunner()
    cache = PatternCache(settings.cache_extension)
    steps: list[PipelineStep] = [
        ResolveOutputDirStep(),
        CacheLookupStep(cache, report, settings.extractor_tool),
        ExtractPatternStep(
            locator,
            runner,
            report,
            tool_name=settings.extractor_tool,
            prompt=settings.extractor_prompt,
        ),
        PersistPatternStep(cache, report),
        SplitDocumentStep(locator, runner, report, tool_name=settings.splitter_tool),
    ]
    return PipelineController(steps, report)
