"""Service for scanning a content directory and checking its documents."""

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from loguru import logger

from notecheck.checks import Issue, Severity, run_checks
from notecheck.config import ProjectConfig
from notecheck.file_utils import FileError, ParseError
from notecheck.ignore_utils import filter_files, load_gitignore_patterns
from notecheck.markdown import DocumentMarkdown, DocumentParser


@dataclass
class ScanResult:
    """Result of scanning a directory."""

    # relative posix path -> absolute path
    files: Dict[str, Path] = field(default_factory=dict)
    ignored: int = 0


@dataclass
class CheckReport:
    """Outcome of checking a set of documents.

    Attributes:
        documents: Parsed documents keyed by relative path
        issues: Issues keyed by relative path
        errors: Files that could not be read or decoded
        checksums: Content checksums keyed by relative path
    """

    documents: Dict[str, DocumentMarkdown] = field(default_factory=dict)
    issues: Dict[str, List[Issue]] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    checksums: Dict[str, str] = field(default_factory=dict)

    @property
    def all_issues(self) -> List[Issue]:
        return [issue for path in sorted(self.issues) for issue in self.issues[path]]

    @property
    def error_count(self) -> int:
        found = sum(1 for issue in self.all_issues if issue.severity == Severity.ERROR)
        return found + len(self.errors)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.all_issues if issue.severity == Severity.WARNING)

    def ok(self, strict: bool = False) -> bool:
        """True when there are no errors (and no warnings when strict)."""
        if strict:
            return self.error_count == 0 and self.warning_count == 0
        return self.error_count == 0


class CheckService:
    """Finds markdown documents and runs the configured checks on them."""

    def __init__(self, parser: DocumentParser, config: ProjectConfig):
        self.parser = parser
        self.config = config

    def is_document(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in self.config.extensions

    async def scan_directory(self, directory: Path) -> ScanResult:
        """
        Scan directory for markdown documents.

        Args:
            directory: Directory to scan

        Returns:
            ScanResult with absolute document paths keyed by relative path
        """
        directory = directory.resolve()
        logger.debug(f"Scanning directory: {directory}")
        result = ScanResult()

        if not directory.exists():
            logger.debug(f"Directory does not exist: {directory}")
            return result

        patterns = load_gitignore_patterns(directory, self.config.ignore_patterns)
        candidates = [path for path in sorted(directory.rglob("*")) if self.is_document(path)]
        kept, result.ignored = filter_files(candidates, directory, patterns)
        for path in kept:
            result.files[path.relative_to(directory).as_posix()] = path

        logger.debug(f"Found {len(result.files)} documents, ignored {result.ignored}")
        return result

    async def parse(self, path: Path) -> DocumentMarkdown:
        return await self.parser.parse_file(path)

    async def check_document(
        self, document: DocumentMarkdown, rules: Optional[Iterable[str]] = None
    ) -> List[Issue]:
        return run_checks(
            document,
            rules=rules,
            disabled=self.config.disabled_rules,
            require_draft=self.config.require_draft,
        )

    async def check_file(self, path: Path, rules: Optional[Iterable[str]] = None) -> List[Issue]:
        """Parse and check a single file."""
        document = await self.parse(path)
        return await self.check_document(document, rules)

    async def check_paths(
        self, paths: Dict[str, Path], rules: Optional[Iterable[str]] = None
    ) -> CheckReport:
        """Check the given documents, keyed by display path."""
        report = CheckReport()
        for rel_path, path in paths.items():
            try:
                document = await self.parse(path)
            except (FileError, ParseError) as e:
                logger.warning(f"Could not read {rel_path}: {e}")
                report.errors[rel_path] = str(e)
                continue

            document.path = Path(rel_path)
            report.documents[rel_path] = document
            if document.checksum:
                report.checksums[rel_path] = document.checksum

            issues = await self.check_document(document, rules)
            if issues:
                report.issues[rel_path] = issues

        logger.info(
            f"Checked {len(report.documents)} documents: "
            f"{report.error_count} errors, {report.warning_count} warnings"
        )
        return report

    async def check_directory(
        self, directory: Optional[Path] = None, rules: Optional[Iterable[str]] = None
    ) -> CheckReport:
        """Scan a directory and check every document in it."""
        directory = directory or self.config.content_dir
        scan = await self.scan_directory(directory)
        return await self.check_paths(scan.files, rules)

    @staticmethod
    def tag_index(report: CheckReport) -> Dict[str, List[str]]:
        """Map each tag to the documents carrying it, sorted by tag."""
        index = defaultdict(set)
        for rel_path, document in report.documents.items():
            for tag in document.tags:
                index[tag].add(rel_path)
        return {tag: sorted(index[tag]) for tag in sorted(index, key=str.lower)}
