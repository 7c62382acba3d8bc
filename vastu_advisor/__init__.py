"""
vastu_advisor - Plan advisory service

This package runs the coverage analysis for a configured plan, evaluates
data-driven rule modules against it and assembles the advisory report.

Architecture:
- AdvisorService: Main orchestrator
- RuleModuleRegistry: Thread-safe rule module management
- SectorIdealModule / RingIdealModule: Data-driven rule modules
- AdvisorConfig: Configuration management (YAML)
"""

from vastu_advisor.config import AdvisorConfig
from vastu_advisor.modules import (
    RuleModule,
    RuleModuleResult,
    SectorIdealModule,
    RingIdealModule,
    build_rule_module,
)
from vastu_advisor.registry import RuleModuleRegistry
from vastu_advisor.service import AdvisorService, build_report

__all__ = [
    "AdvisorConfig",
    "RuleModule",
    "RuleModuleResult",
    "SectorIdealModule",
    "RingIdealModule",
    "build_rule_module",
    "RuleModuleRegistry",
    "AdvisorService",
    "build_report",
]
