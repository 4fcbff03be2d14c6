"""
Services layer - business logic over the document store.

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Status rules live in status_workflow and nowhere else
- Every report mutation appends exactly one timeline entry
- Errors propagate to the caller; nothing is retried
"""
