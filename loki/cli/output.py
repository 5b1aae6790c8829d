"""CLI output utilities and formatting."""

from colorama import Fore, Style

BANNER = f"""
{Fore.MAGENTA}{Style.BRIGHT}  _       _    _{Style.RESET_ALL}
{Fore.MAGENTA}{Style.BRIGHT} | | ___ | | _(_){Style.RESET_ALL}
{Fore.MAGENTA}{Style.BRIGHT} | |/ _ \\| |/ / |{Style.RESET_ALL}
{Fore.MAGENTA}{Style.BRIGHT} | | (_) |   <| |{Style.RESET_ALL}
{Fore.MAGENTA}{Style.BRIGHT} |_|\\___/|_|\\_\\_|{Style.RESET_ALL}

 {Fore.WHITE}{Style.BRIGHT}A minimal content-addressed version control system{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"
