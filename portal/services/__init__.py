"""
Services package
"""
from portal.services.api_client import ApiClient
from portal.services.progress_tracker import ProgressTracker, compute_progress_pct
from portal.services.session_store import SessionStore

__all__ = ['ApiClient', 'ProgressTracker', 'SessionStore', 'compute_progress_pct']
