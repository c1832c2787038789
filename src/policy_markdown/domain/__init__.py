"""Domain models for policy-markdown."""

from policy_markdown.domain.models import PolicyDocument

__all__ = ["PolicyDocument"]
