"""
Flows - High-level UI action sequences built on the adaptive locator.

Each flow takes a page object (which holds the locator) and returns a bool
that test scripts can assert on.
"""

from .main_page import MainPage
from .navigation_flow import navigation_flow, run_steps, NavigationResult

__all__ = ['MainPage', 'navigation_flow', 'run_steps', 'NavigationResult']
