from sla.infrastructure.analysis.random_analyzer import RandomRecordAnalyzer

__all__ = ["RandomRecordAnalyzer"]
