"""
Utilities Package

Helpers shared by the routers:
- pagination.py: PageRequest, Page, Pager and PageableView
- messages.py: Message banner and flash-scope helpers
"""
