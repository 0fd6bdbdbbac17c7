# Contains the receipt tools: OCR, vendor spending, analytics and extraction from mail.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Optional, Type
from .base_tool import BackendTool, ToolInput


class ReceiptOcrInput(ToolInput):
    """Input model for the Receipt OCR tool."""
    file_path: str = Field(..., alias="filePath", description="Storage path of the receipt to scan.")

class ReceiptOcrTool(BackendTool):
    name: str = "receipt_ocr"
    description: str = "OCR-scan a receipt file and extract its data."
    args_schema: Type[ToolInput] = ReceiptOcrInput
    method: str = "POST"
    path: str = "/api/receipt-ocr"


class VendorSpendingInput(ToolInput):
    """Input model for the Vendor Spending tool."""
    vendor: Optional[str] = Field(default=None, description="Vendor or shop name.")
    months: Optional[int] = Field(default=None, description="How many months back.")

class VendorSpendingTool(BackendTool):
    name: str = "vendor_spending"
    description: str = "Show the user's spending per vendor or shop."
    args_schema: Type[ToolInput] = VendorSpendingInput
    path: str = "/api/vendor-spending"

    def build_payload(self, args: VendorSpendingInput) -> Dict[str, Any]:
        return {"vendor": args.vendor, "months": args.months}


class ReceiptAnalyticsInput(ToolInput):
    """Input model for the Receipt Analytics tool."""
    days: Optional[int] = Field(default=30, description="How many days back to analyse.")

class ReceiptAnalyticsTool(BackendTool):
    name: str = "receipt_analytics"
    description: str = "Analyse the user's receipts: total cost, categories and trends."
    args_schema: Type[ToolInput] = ReceiptAnalyticsInput
    path: str = "/api/receipt-analytics"

    def build_payload(self, args: ReceiptAnalyticsInput) -> Dict[str, Any]:
        return {"days": args.days or 30}


class ExtractReceiptsInput(ToolInput):
    """Input model for the Extract Receipts tool."""
    days: Optional[int] = Field(default=7, description="How many days of mail to scan.")

class ExtractReceiptsTool(BackendTool):
    name: str = "extract_receipts_from_emails"
    description: str = "Find receipts in recent emails and process them."
    args_schema: Type[ToolInput] = ExtractReceiptsInput
    method: str = "POST"
    path: str = "/api/extract-receipts"

    def build_payload(self, args: ExtractReceiptsInput) -> Dict[str, Any]:
        return {"days": args.days or 7}
