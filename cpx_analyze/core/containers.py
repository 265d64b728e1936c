from __future__ import annotations

from cpx_analyze.normalizers.clang_tidy_normalizer import ClangTidyNormalizer
from cpx_analyze.normalizers.cppcheck_normalizer import CppcheckNormalizer
from cpx_analyze.normalizers.flawfinder_normalizer import FlawfinderNormalizer
from cpx_analyze.normalizers.registry import NormalizerRegistry
from cpx_analyze.services.aggregate_service import AggregateService
from cpx_analyze.services.normalize_service import NormalizeService
from cpx_analyze.services.report_service import ReportService


def build_normalizer_registry() -> NormalizerRegistry:
    """Normalizers in the order the analyzers are usually run."""
    return NormalizerRegistry(
        [
            CppcheckNormalizer(),
            ClangTidyNormalizer(),
            FlawfinderNormalizer(),
        ]
    )


def build_normalize_service() -> NormalizeService:
    return NormalizeService(build_normalizer_registry())


def build_aggregate_service() -> AggregateService:
    return AggregateService()


def build_report_service() -> ReportService:
    return ReportService()
