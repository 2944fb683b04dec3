"""resume-studio - structured resume editing with ATS scoring."""

__version__ = "0.1.0"
