"""SFDX project lookup"""
from apexlog_sync.project.sfdx import find_project_root, read_source_api_version

__all__ = ["find_project_root", "read_source_api_version"]
