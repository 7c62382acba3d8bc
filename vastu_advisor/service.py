"""
Advisor Service - Plan analysis orchestrator.

This module provides the AdvisorService class which runs the complete
advisory flow for one plan: coverage analysis, rule module evaluation,
and report assembly.

Architecture:
- CoverageAnalysis (vastu_zone) does partition + sampling
- RuleModuleRegistry holds the data-driven rule modules
- Each module is evaluated independently; a module raising a kernel error
  is logged and recorded as skipped, the others still run
- Result is an immutable AdvisoryReport (vastu_report.schemas)
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from vastu_zone import AnalysisBuilder, InvalidWeightError, PlanCoverage, VastuKernelError
from vastu_report.logging import LogEvent, StructuredLogger, create_logger
from vastu_report.schemas import (
    SCHEMA_VERSION,
    AdvisoryReport,
    ModuleStatus,
    PlanExtent,
    RingCoverageRecord,
    RuleModuleRecord,
    ScoreRecord,
    Timestamp,
    ZoneCoverageRecord,
)
from vastu_advisor.config import AdvisorConfig
from vastu_advisor.modules import RuleModule, RuleModuleResult, build_rule_module
from vastu_advisor.registry import RuleModuleRegistry

logger = logging.getLogger(__name__)


class AdvisorService:
    """
    Runs coverage analysis and rule modules for one plan.

    Usage:
        config = AdvisorConfig.from_yaml("plan.yaml")
        service = AdvisorService(config)
        report = service.run()
        service.write_report(report, "report.json")
    """

    def __init__(
        self,
        config: AdvisorConfig,
        registry: Optional[RuleModuleRegistry] = None,
        structured_logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize advisor service.

        Args:
            config: Advisor configuration
            registry: Rule module registry (default: built from config.rule_modules)
            structured_logger: JSON logger for analysis and module events
        """
        self.config = config
        self.structured_logger = structured_logger or create_logger("advisor")
        self.structured_logger.debug(
            event=LogEvent.CONFIG_LOADED,
            message="Advisor configuration loaded",
            metadata={
                'plan_id': config.plan_id,
                'rings': [ring.name for ring in config.rings],
                'rule_modules': len(config.rule_modules),
                'sample_count': config.sampling.sample_count,
            },
        )

        if registry is None:
            registry = RuleModuleRegistry()
            self._initialize_modules(registry)
        self.registry = registry

        logger.info(f"AdvisorService initialized for plan_id={config.plan_id}")

    def _initialize_modules(self, registry: RuleModuleRegistry) -> None:
        """Register every configured rule module."""
        for module_config in self.config.rule_modules:
            registry.add(build_rule_module(module_config), enabled=module_config.enabled)
            self.structured_logger.debug(
                event=LogEvent.RULE_MODULE_REGISTERED,
                message="Rule module registered",
                metadata={
                    'module': module_config.name,
                    'kind': module_config.kind,
                    'enabled': module_config.enabled,
                },
            )

    def analyze(
        self,
        cancel_event: Optional[threading.Event] = None,
        workers: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> PlanCoverage:
        """
        Run coverage analysis only.

        Args:
            cancel_event: Set to cancel outstanding sampling tasks
            workers: Override configured worker count
            seed: Override configured seed

        Raises:
            VastuKernelError: On invalid or degenerate boundary, or cancellation
        """
        sampling = self.config.sampling
        builder = (
            AnalysisBuilder()
            .with_plan_id(self.config.plan_id)
            .with_boundary(self.config.boundary)
            .with_north_rotation(self.config.north_rotation)
            .with_sample_count(sampling.sample_count)
            .with_seed(seed if seed is not None else sampling.seed)
            .with_sampling_mode(sampling.mode)
            .with_workers(workers if workers is not None else sampling.workers)
            .with_logger(self.structured_logger)
        )
        for ring in self.config.rings:
            builder.add_ring(ring.name, ring.inner_radius, ring.outer_radius)

        return builder.build().run(cancel_event)

    def evaluate(self, coverage: PlanCoverage) -> list:
        """
        Evaluate every enabled rule module against a coverage result.

        Returns:
            List of RuleModuleRecord, in registration order
        """
        records = []
        for module in self.registry.snapshot():
            records.append(self._evaluate_module(module, coverage))
        return records

    def _evaluate_module(self, module: RuleModule, coverage: PlanCoverage) -> RuleModuleRecord:
        try:
            result = module.evaluate(coverage)
        except VastuKernelError as e:
            event = (
                LogEvent.WEIGHT_ERROR if isinstance(e, InvalidWeightError)
                else LogEvent.RULE_MODULE_ERROR
            )
            self.structured_logger.error(
                event=event,
                message="Rule module skipped",
                metadata={'module': module.name, 'plan_id': coverage.plan_id},
                exc_info=e,
            )
            return RuleModuleRecord(
                name=module.name,
                status=ModuleStatus.SKIPPED,
                error=f"{type(e).__name__}: {e}",
            )

        self.structured_logger.info(
            event=LogEvent.RULE_MODULE_EVALUATED,
            message="Rule module evaluated",
            metadata={'module': module.name, 'composite': result.composite},
        )
        return _module_record(result)

    def run(
        self,
        cancel_event: Optional[threading.Event] = None,
        workers: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> AdvisoryReport:
        """
        Analyse the plan and evaluate all rule modules.

        Returns:
            AdvisoryReport

        Raises:
            VastuKernelError: If the analysis itself fails (module failures
                are recorded in the report instead)
        """
        coverage = self.analyze(cancel_event=cancel_event, workers=workers, seed=seed)
        modules = self.evaluate(coverage)
        report = build_report(coverage, modules)

        skipped = report.skipped_modules
        if skipped:
            logger.warning(f"Plan {coverage.plan_id}: skipped rule modules {skipped}")
        return report

    def write_report(self, report: AdvisoryReport, output_path: Path) -> Path:
        """Serialize a report as JSON."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(report.to_dict(), f, indent=2)

        self.structured_logger.info(
            event=LogEvent.REPORT_WRITTEN,
            message="Advisory report written",
            metadata={'plan_id': report.plan_id, 'path': str(output_path)},
        )
        return output_path


def _module_record(result: RuleModuleResult) -> RuleModuleRecord:
    return RuleModuleRecord(
        name=result.name,
        status=ModuleStatus.EVALUATED,
        composite=result.composite,
        scores=[
            ScoreRecord(
                key=s.key,
                actual=s.actual,
                ideal=s.ideal,
                weight=s.weight,
                normalized_value=s.score.normalized_value,
                deviation=s.score.deviation,
                band=s.score.band.value,
            )
            for s in result.scores
        ],
        metrics=dict(result.metrics),
    )


def build_report(coverage: PlanCoverage, modules: list) -> AdvisoryReport:
    """Assemble the serializable report from a coverage result and module records."""
    box = coverage.bounding_box
    partition = coverage.partition

    rings = [
        RingCoverageRecord(
            name=ring.name,
            inner_radius=ring.ring.inner_radius,
            outer_radius=ring.ring.outer_radius,
            average=ring.average,
            uniformity=ring.uniformity,
            zones=[
                ZoneCoverageRecord(
                    zone_number=z.zone.zone_number,
                    direction_code=z.zone.direction_code,
                    sector=z.zone.sector,
                    start_angle=z.zone.start_angle,
                    end_angle=z.zone.end_angle,
                    coverage=z.coverage,
                    sample_count=z.sample.sample_count,
                    inside_count=z.sample.inside_count,
                )
                for z in ring.zones
            ],
        )
        for ring in coverage.rings
    ]

    return AdvisoryReport(
        schema_version=SCHEMA_VERSION,
        timestamp=Timestamp.now(),
        plan_id=coverage.plan_id,
        extent=PlanExtent(
            min_x=box.min_x,
            min_y=box.min_y,
            width=box.width,
            height=box.height,
        ),
        center_x=partition.center_x,
        center_y=partition.center_y,
        radius=partition.radius,
        north_rotation=partition.north_rotation,
        seed=coverage.seed,
        sample_count=coverage.sample_count,
        sampling_mode=coverage.mode.value,
        rings=rings,
        sectors=coverage.sector_coverage(),
        modules=list(modules),
    )
