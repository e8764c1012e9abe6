"""
Leave Module.

Applied-leave listing and the grant / decline / revoke workflow.
"""

from modules.leave.leave_module import LeaveModule

__all__ = ["LeaveModule"]
