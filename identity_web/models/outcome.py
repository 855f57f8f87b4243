"""
Gateway outcomes: either a view to render or a redirect to follow.
"""
from typing import Any, Dict, Optional


class ViewOutcome:
    """Named view plus the model attributes it is rendered with."""
    
    def __init__(self, view_name: str, model: Optional[Dict[str, Any]] = None):
        self.view_name = view_name
        self.model = model if model is not None else {}
    
    def __repr__(self):
        return f"ViewOutcome(view_name={self.view_name}, model={sorted(self.model)})"


class RedirectOutcome:
    """Instruction to send the caller to another path."""
    
    def __init__(self, redirect_target: str):
        self.redirect_target = redirect_target
    
    def __repr__(self):
        return f"RedirectOutcome(redirect_target={self.redirect_target})"
