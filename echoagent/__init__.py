"""Tools, skills, a guarded shell tool and DAG task planning for LLM agents."""

__version__ = "0.1.0"