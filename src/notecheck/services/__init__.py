from notecheck.services.check_service import CheckReport, CheckService, ScanResult
from notecheck.services.document_writer import DocumentWriter

__all__ = ["CheckReport", "CheckService", "DocumentWriter", "ScanResult"]
