"""Attendance database tools exposed over MCP."""

from .server import AttendanceServer, build_attendance_server

__all__ = ["AttendanceServer", "build_attendance_server"]
