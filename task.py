#!/usr/bin/env python3
"""
Python task runner for Jira Burndown Sync
"""

import shutil
import subprocess
import sys
from pathlib import Path

# Colors for output
GREEN = '\033[0;32m'
YELLOW = '\033[1;33m'
RED = '\033[0;31m'
NC = '\033[0m'  # No Color

# Project paths
VENV = Path('.venv')
VENV_BIN = VENV / 'bin'
PYTHON = VENV_BIN / 'python'
PIP = VENV_BIN / 'pip'
PYTEST = VENV_BIN / 'pytest'
BLACK = VENV_BIN / 'black'
RUFF = VENV_BIN / 'ruff'


def run_command(cmd, check=True):
    """Run a command and return the result."""
    print(f"{GREEN}Running: {cmd}{NC}")
    return subprocess.run(cmd, shell=True, check=check)


def check_venv():
    """Check if virtual environment exists."""
    if not VENV.exists():
        print(f"{YELLOW}Virtual environment not found. Creating...{NC}")
        subprocess.run([sys.executable, '-m', 'venv', '.venv'], check=True)


def task_help():
    """Show help information."""
    print(f"""{GREEN}Available tasks:{NC}

  python task.py dev                 # Install package and dev dependencies
  python task.py test                # Run tests
  python task.py test-coverage       # Run tests with coverage
  python task.py lint                # Run ruff
  python task.py format              # Format code with black
  python task.py run                 # Sync the sprint in config.yml
  python task.py clean               # Remove build artifacts
""")


def task_dev():
    """Install the package in editable mode with dev dependencies."""
    check_venv()
    run_command(f"{PIP} install --upgrade pip")
    run_command(f"{PIP} install -e .")
    run_command(f"{PIP} install -r requirements-dev.txt")


def task_test():
    """Run tests."""
    run_command(f"{PYTEST} -v")


def task_test_coverage():
    """Run tests with coverage."""
    run_command(f"{PYTEST} --cov=jira_burndown_sync --cov-report=term")


def task_lint():
    """Run linters."""
    run_command(f"{RUFF} check .")


def task_format():
    """Format code."""
    run_command(f"{BLACK} .")


def task_run():
    """Run the CLI."""
    if not Path('config.yml').exists():
        print(f"{RED}Error: config.yml not found{NC}")
        sys.exit(1)
    run_command(f"{PYTHON} -m jira_burndown_sync.cli -v config.yml")


def task_clean():
    """Remove build artifacts."""
    for pattern in ['__pycache__', '.pytest_cache', '*.egg-info', 'build', 'dist']:
        for path in Path('.').rglob(pattern):
            if path.is_file():
                path.unlink()
            elif path.is_dir():
                shutil.rmtree(path)
    print(f"{GREEN}Clean complete{NC}")


def main():
    """Main task dispatcher."""
    if len(sys.argv) < 2:
        task_help()
        return

    task_name = sys.argv[1].replace('-', '_')
    tasks = {
        'help': task_help,
        'dev': task_dev,
        'test': task_test,
        'test_coverage': task_test_coverage,
        'lint': task_lint,
        'format': task_format,
        'run': task_run,
        'clean': task_clean,
    }

    if task_name in tasks:
        try:
            tasks[task_name]()
        except subprocess.CalledProcessError as e:
            print(f"{RED}Task failed with exit code {e.returncode}{NC}")
            sys.exit(1)
    else:
        print(f"{RED}Unknown task: {sys.argv[1]}{NC}")
        task_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
