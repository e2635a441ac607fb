from .terminal_report import print_terminal_summary

__all__ = ["print_terminal_summary"]
