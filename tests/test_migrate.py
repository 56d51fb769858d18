"""
Tests for the schema management script.
"""

import pytest

import migrate


def test_reset_requires_confirmation(capsys):
    assert migrate.main(["reset"]) == 1
    assert "--confirm" in capsys.readouterr().out


def test_no_command_prints_help():
    assert migrate.main([]) == 1


@pytest.mark.asyncio
async def test_create_then_check():
    assert await migrate.run("create") is True
    assert await migrate.run("check") is True


@pytest.mark.asyncio
async def test_reset_allowed_in_testing():
    assert await migrate.run("reset") is True
