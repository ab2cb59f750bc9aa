"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Singleton Proxy correctness.
2. Injection capabilities (`set_console`), including the package theme.
3. Standard logging wrappers and their prefixes.
"""

from rich.console import Console

from qb_lint.utils.console import (
  SEVERITY_STYLES,
  console,
  get_console,
  get_logger,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
)


def test_console_singleton_proxy():
  """
  Verify `console` acts as a proxy to a real Rich console.
  """
  assert hasattr(console, "print")
  assert callable(console.print)
  assert hasattr(console, "export_text")
  assert isinstance(get_console(), Console)


def test_custom_console_injection():
  """
  Verify we can inject a capturing console and retrieve logs.
  """
  capture_console = Console(record=True, width=200)
  set_console(capture_console)

  log_warning("Captured Lint Warning")

  output = capture_console.export_text()
  assert "Captured Lint Warning" in output
  assert "⚠️" in output


def test_injected_console_understands_theme_styles():
  """Markup using package style names renders on an injected console."""
  capture_console = Console(record=True, width=200)
  set_console(capture_console)

  console.print("[path]demo.bas[/path]: [success]valid[/success]")

  assert "demo.bas: valid" in capture_console.export_text()


def test_reset_functionality():
  """
  Verify `reset_console` restores default behavior.
  """
  original_backend = get_console()

  temp = Console()
  set_console(temp)
  assert get_console() is temp

  reset_console()
  current = get_console()

  assert current is not temp
  assert current is not original_backend
  assert isinstance(current, Console)


def test_logging_wrappers_format(capsys):
  """
  Verify semantic wrappers write their prefixes to the default console.
  """
  reset_console()

  log_info("InfoText")
  log_error("ErrorText")
  log_success("DoneText")

  captured = capsys.readouterr()

  assert "InfoText" in captured.out
  assert "ErrorText" in captured.out
  assert "DoneText" in captured.out
  assert "ℹ️" in captured.out
  assert "❌" in captured.out
  assert "✅" in captured.out


def test_single_rich_handler_after_swaps():
  """Swapping consoles never stacks duplicate handlers."""
  set_console(Console(record=True))
  set_console(Console(record=True))
  reset_console()

  rich_handlers = [h for h in get_logger().handlers if type(h).__name__ == "RichHandler"]
  assert len(rich_handlers) == 1


def test_severity_styles_cover_all_severities():
  assert set(SEVERITY_STYLES) == {"error", "warning", "info"}


def test_proxy_getattr_delegation():
  """
  Attributes not defined on the proxy fall through to the backend.
  """
  width = console.width
  assert isinstance(width, int)
  assert width > 0
