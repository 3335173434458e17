import pytest

from echoagent.errors import MissingParameterError
from echoagent.shell import CommandSafety, SafetyLevel, ShellTool


@pytest.fixture
def tool():
    return ShellTool()


@pytest.mark.parametrize(
    "command",
    ["ls -la", "pwd", "cat README.md", "git status", "cargo check"],
)
def test_safe_commands(tool, command):
    assert tool.check_command_safety(command) == CommandSafety.safe()


@pytest.mark.parametrize(
    "command",
    ["rm -rf /tmp/test", "curl http://example.com", "npm install package", "python script.py"],
)
def test_require_approval_commands(tool, command):
    assert tool.check_command_safety(command).level is SafetyLevel.REQUIRES_APPROVAL


@pytest.mark.parametrize(
    "command",
    ["dd if=/dev/zero of=/dev/sda", "sudo apt install", "chmod 777 /etc/passwd", "reboot"],
)
def test_dangerous_commands(tool, command):
    assert tool.check_command_safety(command).level is SafetyLevel.DANGEROUS


@pytest.mark.parametrize("command", ["git log", "git diff", "git status"])
def test_git_safe(tool, command):
    assert tool.check_command_safety(command) == CommandSafety.safe()


@pytest.mark.parametrize(
    "command",
    ["git commit -m 'test'", "git push origin main", "git add .", "git clean -fd"],
)
def test_git_requires_approval(tool, command):
    assert tool.check_command_safety(command).level is SafetyLevel.REQUIRES_APPROVAL


def test_git_reset_hard_is_dangerous(tool):
    verdict = tool.check_command_safety("git reset --hard HEAD~1")
    assert verdict.level is SafetyLevel.DANGEROUS
    assert "--hard" in verdict.reason


def test_git_soft_reset_requires_approval(tool):
    assert tool.check_command_safety("git reset HEAD~1").level is SafetyLevel.REQUIRES_APPROVAL


@pytest.mark.parametrize("command", ["cargo check", "cargo test", "cargo clippy", "cargo build"])
def test_cargo_safe(tool, command):
    assert tool.check_command_safety(command) == CommandSafety.safe()


@pytest.mark.parametrize("command", ["cargo run", "cargo install some-package", "cargo clean"])
def test_cargo_requires_approval(tool, command):
    assert tool.check_command_safety(command).level is SafetyLevel.REQUIRES_APPROVAL


def test_unknown_command_in_strict_mode(tool):
    assert tool.check_command_safety("unknown_command").level is SafetyLevel.DANGEROUS


def test_unknown_command_in_permissive_mode():
    assert ShellTool.permissive().check_command_safety("unknown_command") == CommandSafety.safe()


def test_permissive_still_rejects_blacklist():
    assert ShellTool.permissive().check_command_safety("sudo ls").level is SafetyLevel.DANGEROUS


def test_empty_command_is_dangerous(tool):
    assert tool.check_command_safety("   ") == CommandSafety.dangerous("空命令")


def test_sed_requires_approval(tool):
    verdict = tool.check_command_safety("sed -i s/a/b/ file")
    assert verdict == CommandSafety.requires_approval("'sed' 命令可能修改文件，需要确认")


@pytest.mark.asyncio
async def test_execute_safe_command(tool):
    result = await tool.execute({"command": "echo hello"})
    assert result.success
    assert "hello" in result.output


@pytest.mark.asyncio
async def test_execute_requires_approval(tool):
    result = await tool.execute({"command": "rm test.txt"})
    assert not result.success
    assert "确认" in result.error


@pytest.mark.asyncio
async def test_execute_dangerous(tool):
    result = await tool.execute({"command": "sudo reboot"})
    assert not result.success
    assert "拒绝" in result.error


@pytest.mark.asyncio
async def test_execute_failing_command(tool, tmp_path):
    missing = tmp_path / "missing_dir"
    result = await tool.execute({"command": f"ls {missing}"})
    assert not result.success
    assert "命令执行失败，退出码: Some(" in result.error


@pytest.mark.asyncio
async def test_execute_missing_command(tool):
    with pytest.raises(MissingParameterError):
        await tool.execute({})