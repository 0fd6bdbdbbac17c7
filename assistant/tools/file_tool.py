# Contains the file-storage tools (list, upload, download, copy).
# Paths are relative to the app folder the backend is scoped to; "" is its root.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Optional, Type
from .base_tool import BackendTool, ToolInput


class ListFilesInput(ToolInput):
    """Input model for the List Files tool."""
    path: Optional[str] = Field(default="", description="Folder to list, e.g. '/Kvitton/' (default: root).")

class ListFilesTool(BackendTool):
    name: str = "list_files"
    description: str = "List files in the user's file storage."
    args_schema: Type[ToolInput] = ListFilesInput
    path: str = "/api/dropbox/list"

    def build_payload(self, args: ListFilesInput) -> Dict[str, Any]:
        return {"path": args.path or ""}


class UploadFileInput(ToolInput):
    """Input model for the Upload File tool."""
    path: str = Field(..., description="Destination path.")
    content: str = Field(..., description="File content.")

class UploadFileTool(BackendTool):
    name: str = "upload_file"
    description: str = "Upload a file to the user's file storage."
    args_schema: Type[ToolInput] = UploadFileInput
    method: str = "POST"
    path: str = "/api/dropbox/upload"


class DownloadFileInput(ToolInput):
    """Input model for the Download File tool."""
    path: str = Field(..., description="Path of the file to download.")

class DownloadFileTool(BackendTool):
    name: str = "download_file"
    description: str = "Download a file from the user's file storage."
    args_schema: Type[ToolInput] = DownloadFileInput
    method: str = "POST"
    path: str = "/api/dropbox/download"

    def build_payload(self, args: DownloadFileInput) -> Dict[str, Any]:
        return {"path": args.path}


class CopyFileInput(ToolInput):
    """Input model for the Copy File tool."""
    from_path: str = Field(..., alias="fromPath", description="Source path.")
    to_path: str = Field(..., alias="toPath", description="Destination path.")

class CopyFileTool(BackendTool):
    name: str = "copy_file"
    description: str = "Copy a file within the user's file storage."
    args_schema: Type[ToolInput] = CopyFileInput
    method: str = "POST"
    path: str = "/api/dropbox/copy"
