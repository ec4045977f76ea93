from abc import ABC, abstractmethod

from scanotron.cache.exceptions import CacheWriteError
from scanotron.cache.pattern_cache import PatternCache
from scanotron.logging.logger import Log
from scanotron.parsing.output_parser import parse_pattern, parse_split_output
from scanotron.pipeline.exceptions import StageFailedError
from scanotron.pipeline.models import PipelineContext, PipelineState, default_output_dir
from scanotron.reporting.base import BaseReportSink
from scanotron.tools.locator import ExecutableLocator
from scanotron.tools.runner import ProcessRunner


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


class ResolveOutputDirStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.state = PipelineState.RESOLVE_OUTPUT_DIR
        request = context.request
        output_dir = request.output_dir or default_output_dir(request.document)
        output_dir.mkdir(parents=True, exist_ok=True)
        context.output_dir = output_dir
        Log.debug(f"Output directory: {output_dir}")
        return context


class CacheLookupStep(PipelineStep):
    def __init__(self, cache: PatternCache, report: BaseReportSink, extractor_tool: str) -> None:
        self._cache = cache
        self._report = report
        self._extractor_tool = extractor_tool

    def run(self, context: PipelineContext) -> PipelineContext:
        context.state = PipelineState.CACHE_LOOKUP
        document = context.request.document
        context.cache_path = self._cache.path_for(document)
        cached = self._cache.exists(document)

        if cached and context.request.force:
            self._report.step(1, "Force regenerating pattern (ignoring cache)")
            return context

        pattern = self._cache.read(document) if cached else None
        if not pattern:
            if cached:
                self._report.warning(f"Ignoring empty pattern file: {context.cache_path}")
            self._report.step(1, f"Running {self._extractor_tool} to analyze the PDF")
            return context

        context.state = PipelineState.CACHE_HIT
        self._report.step(1, "Using cached pattern")
        self._report.success(f"Found existing pattern file: {context.cache_path}")
        self._report.info("Use --force to regenerate the pattern")
        context.pattern = pattern
        self._report.info(
            f"Pattern from cache: {pattern}",
            {"pattern": pattern, "source": "cache"},
        )
        return context


class ExtractPatternStep(PipelineStep):
    def __init__(
        self,
        locator: ExecutableLocator,
        runner: ProcessRunner,
        report: BaseReportSink,
        tool_name: str,
        prompt: str,
    ) -> None:
        self._locator = locator
        self._runner = runner
        self._report = report
        self._tool_name = tool_name
        self._prompt = prompt

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.state is PipelineState.CACHE_HIT:
            return context
        context.state = PipelineState.EXTRACT_PATTERN
        request = context.request
        tool = self._locator.locate(self._tool_name)

        self._report.info(
            f"Invoking {tool.name}...",
            {
                "executable": str(tool.executable),
                "model": request.model or "default",
                "endpoint": request.endpoint or "default",
            },
        )
        invocation = self._runner.run(tool.executable, self.build_args(context), tool.project_dir)

        if not invocation.succeeded:
            raise StageFailedError(
                f"{tool.name} failed with exit code {invocation.exit_code}",
                exit_code=invocation.exit_code,
                stderr=invocation.stderr,
            )
        if invocation.stderr.strip():
            self._report.warning(f"{tool.name} warnings:\n{invocation.stderr.strip()}")
        self._report.info(f"{tool.name} raw output: '{invocation.stdout.strip()}'")

        context.pattern = parse_pattern(invocation.stdout, tool.name)
        self._report.success(
            f"Pattern extracted from {tool.name}: {context.pattern}",
            {"pattern": context.pattern, "source": tool.name},
        )
        return context

    def build_args(self, context: PipelineContext) -> list[str]:
        """Document path and prompt, plus each optional flag only when set."""
        request = context.request
        args = [str(request.document.absolute()), "--prompt", self._prompt]
        for flag, value in (
            ("--model", request.model),
            ("--endpoint", request.endpoint),
            ("--apikey", request.api_key),
        ):
            if value:
                args.extend([flag, value])
        return args


class PersistPatternStep(PipelineStep):
    def __init__(self, cache: PatternCache, report: BaseReportSink) -> None:
        self._cache = cache
        self._report = report

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.state is PipelineState.CACHE_HIT:
            return context
        if context.pattern is None:
            raise ValueError("PipelineContext.pattern must be set before persist")
        context.state = PipelineState.PERSIST_PATTERN
        try:
            path = self._cache.write(context.request.document, context.pattern)
        except CacheWriteError as exc:
            self._report.warning(str(exc))
            return context
        self._report.success(f"Pattern saved to: {path}")
        return context


class SplitDocumentStep(PipelineStep):
    def __init__(
        self,
        locator: ExecutableLocator,
        runner: ProcessRunner,
        report: BaseReportSink,
        tool_name: str,
    ) -> None:
        self._locator = locator
        self._runner = runner
        self._report = report
        self._tool_name = tool_name

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.pattern is None or context.output_dir is None:
            raise ValueError("PipelineContext.pattern and output_dir must be set before split")
        context.state = PipelineState.SPLIT_DOCUMENT
        self._report.step(2, f"Running {self._tool_name} to split the PDF")
        tool = self._locator.locate(self._tool_name)

        self._report.info(
            f"Invoking {tool.name}...",
            {
                "executable": str(tool.executable),
                "pattern": context.pattern,
                "outputDirectory": str(context.output_dir),
            },
        )
        args = [
            "--file", str(context.request.document.absolute()),
            "--pattern", context.pattern,
            "--output", str(context.output_dir),
        ]
        invocation = self._runner.run(tool.executable, args)

        outcome = parse_split_output(invocation.stdout, invocation.exit_code)
        context.split_outcome = outcome
        for line in outcome.lines:
            if line.created is None:
                self._report.passthrough(line.text)
                continue
            self._report.success(
                f"Created: {line.created.name} with {line.created.group_info}",
                {"file": line.created.name, "groupInfo": line.created.group_info},
            )
        self._report.info(
            f"{tool.name} completed",
            {
                "filesCreated": outcome.files_created,
                "totalPages": outcome.total_pages,
                "createdFiles": [created.name for created in outcome.created_files],
            },
        )
        if invocation.stderr.strip():
            self._report.warning(f"{tool.name} warnings: {invocation.stderr.strip()}")

        if not outcome.success:
            raise StageFailedError(
                f"{tool.name} failed to process the PDF.",
                exit_code=invocation.exit_code,
                stderr=invocation.stderr,
            )
        return context
