"""
Import validation tests.

These tests ensure all modules can be imported successfully, catching
issues like missing dependencies or circular imports BEFORE deployment.

Run with: pytest tests/unit/test_imports.py -v
"""

import importlib
import sys
from pathlib import Path

import pytest


# Add src to path to simulate Lambda environment
SRC_PATH = Path(__file__).parent.parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class TestHandlerImports:
    """Verify all handler modules can be imported without errors."""

    @pytest.mark.parametrize("module_name", [
        "handlers.main",
        "handlers.health_check",
    ])
    def test_handler_import(self, module_name: str):
        """Each entrypoint module should import without errors."""
        try:
            module = importlib.import_module(module_name)
            assert hasattr(module, "lambda_handler"), f"{module_name} missing lambda_handler"
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")

    @pytest.mark.parametrize("handler_name", [
        "create_ticket",
        "list_tickets",
        "get_ticket",
        "update_status",
        "assign_ticket",
        "get_history",
        "add_comment",
        "customer_tickets",
        "agent_tickets",
    ])
    def test_ticket_handlers_exist(self, handler_name: str):
        """Every routed ticket handler should be importable."""
        module = importlib.import_module("handlers.tickets")
        assert callable(getattr(module, handler_name, None)), f"missing {handler_name}"


class TestServiceImports:
    """Verify all service modules can be imported."""

    @pytest.mark.parametrize("module_name", [
        "services.audit_service",
        "services.container",
        "services.ticket_rules",
        "services.ticket_service",
    ])
    def test_service_import(self, module_name: str):
        """Each service module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestRepositoryImports:
    """Verify both storage backends can be imported."""

    @pytest.mark.parametrize("module_name", [
        "repositories.base",
        "repositories.memory_repo",
        "repositories.dynamodb_repo",
    ])
    def test_repository_import(self, module_name: str):
        """Each repository module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestModelImports:
    """Verify all model modules can be imported."""

    @pytest.mark.parametrize("module_name", [
        "models.history",
        "models.response",
        "models.ticket",
    ])
    def test_model_import(self, module_name: str):
        """Each model module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestUtilImports:
    """Verify all utility modules can be imported."""

    @pytest.mark.parametrize("module_name", [
        "utils.clock",
        "utils.config",
        "utils.logging_config",
        "utils.error_handling",
        "utils.validators",
    ])
    def test_util_import(self, module_name: str):
        """Each utility module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestNoSrcPrefix:
    """Ensure no modules use 'from src.' imports (breaks in Lambda)."""

    @pytest.mark.parametrize("package", ["handlers", "services", "repositories", "models", "utils"])
    def test_no_src_prefix(self, package: str):
        """Source files should not have 'from src.' imports."""
        for py_file in (SRC_PATH / package).glob("*.py"):
            content = py_file.read_text()
            assert "from src." not in content, f"{py_file.name} contains 'from src.' import"
            assert "import src." not in content, f"{py_file.name} contains 'import src.' import"
