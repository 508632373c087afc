"""
Agents module for AI-powered email processing.

Provides the summarizer that enriches ingested emails.
"""

from agents.email_summarizer import EmailSummarizer

__all__ = [
    "EmailSummarizer",
]
