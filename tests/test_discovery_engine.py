"""
Tests for the discovery step engine — candidate chains and outcomes.
"""

from pathlib import Path

from sysdiscovery.core.models.config import DiscoveryConfig
from sysdiscovery.core.models.platform import OSFamily
from sysdiscovery.core.models.step import StepOutcome
from sysdiscovery.core.services.discovery import Candidate, DiscoveryStep, Probe
from sysdiscovery.core.services.discovery.catalog import (
    build_steps,
    network_configuration,
    network_share_discovery,
    password_policy_discovery,
    remote_system_discovery,
    system_information,
    user_discovery,
)
from sysdiscovery.core.services.tool_install import CapabilityProber, get_tool
from tests.simulated_hosts import (
    GENERIC_LINUX,
    MACOS,
    UBUNTU,
    UNKNOWN,
    WINDOWS,
    FakeHost,
    Rig,
)


def _interfaces():
    return network_configuration().probes[0]


# ── Catalog ─────────────────────────────────────────────────────────


class TestCatalog:
    def test_step_order(self):
        steps = build_steps()
        assert [s.technique for s in steps] == [
            "T1082", "T1033", "T1087.001", "T1016", "T1018", "T1201", "T1135",
        ]

    def test_subnet_from_config(self):
        config = DiscoveryConfig()
        config.scan.subnet = "10.1.0.0/16"
        probe = remote_system_discovery(config).probes[0]
        assert probe.chains[OSFamily.LINUX][0].argv == ("nmap", "-sn", "10.1.0.0/16")

    def test_macos_remote_chain_never_installs(self):
        probe = remote_system_discovery(DiscoveryConfig()).probes[0]
        assert not any(c.install for c in probe.chains[OSFamily.DARWIN])


# ── Chain walking ───────────────────────────────────────────────────


class TestChainWalking:
    def test_first_candidate_present(self):
        rig = Rig(UBUNTU, FakeHost({"ip", "ifconfig"}))
        result = rig.engine.run_probe(_interfaces())
        assert result.outcome is StepOutcome.EXECUTED
        assert result.candidate == "ip addr"
        assert rig.adapter.commands == ["ip addr"]
        assert "Executing 'ip addr':" in rig.transcript.messages("command")

    def test_present_fallback_preferred_over_install(self):
        rig = Rig(UBUNTU, FakeHost({"ifconfig", "apt-get"}))
        result = rig.engine.run_probe(_interfaces())
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_TOOL
        assert rig.adapter.commands == ["ifconfig"]
        assert rig.ensurer.install_attempts == 0

    def test_ubuntu_installs_iproute2(self):
        host = FakeHost({"apt-get"}, packages={"iproute2": ("ip",)})
        rig = Rig(UBUNTU, host)
        result = rig.engine.run_probe(_interfaces())
        assert rig.adapter.commands == [
            "apt-get update",
            "apt-get install -y iproute2",
            "ip addr",
        ]
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_TOOL
        assert "Executing 'ip addr' after installation:" in rig.transcript.messages("command")

    def test_ubuntu_falls_through_to_net_tools(self):
        host = FakeHost({"apt-get"}, packages={"net-tools": ("ifconfig", "netstat", "route")})
        rig = Rig(UBUNTU, host)
        result = rig.engine.run_probe(_interfaces())
        assert rig.adapter.commands == [
            "apt-get update",
            "apt-get install -y iproute2",
            "apt-get update",
            "apt-get install -y net-tools",
            "ifconfig",
        ]
        assert result.candidate == "ifconfig"
        assert rig.ensurer.install_attempts == 2

    def test_ubuntu_failed_installs_move_on_to_routing(self):
        rig = Rig(UBUNTU, FakeHost({"apt-get", "df"}))
        result = rig.engine.run_step(network_configuration())
        assert [p.outcome for p in result.probes] == [
            StepOutcome.SKIPPED_NO_TOOL,
            StepOutcome.SKIPPED_NO_TOOL,
            StepOutcome.EXECUTED,
        ]
        assert rig.adapter.commands[-1] == "df -h"
        assert result.outcome is StepOutcome.SKIPPED_NO_TOOL

    def test_exhausted_chain(self):
        rig = Rig(UBUNTU, FakeHost(), install_enabled=False)
        result = rig.engine.run_probe(_interfaces())
        assert result.outcome is StepOutcome.SKIPPED_NO_TOOL
        assert rig.adapter.call_count == 0
        assert (
            "Error: Neither 'ip' nor 'ifconfig' commands are available."
            in rig.transcript.messages("failure")
        )

    def test_unsupported_family(self):
        rig = Rig(UNKNOWN, FakeHost({"smbclient"}))
        result = rig.engine.run_probe(network_share_discovery(DiscoveryConfig()).probes[0])
        assert result.outcome is StepOutcome.SKIPPED_UNSUPPORTED
        assert rig.adapter.call_count == 0
        assert (
            "Unsupported OS for Network Share Discovery."
            in rig.transcript.messages("failure")
        )

    def test_missing_family_gets_generic_message(self):
        probe = Probe(
            name="Widget Discovery",
            chains={OSFamily.LINUX: (Candidate(argv=("widget",), tool=get_tool("widget")),)},
        )
        rig = Rig(GENERIC_LINUX, FakeHost())
        rig.engine.run_probe(probe)
        assert (
            "Error: No suitable command found for Widget Discovery."
            in rig.transcript.messages("failure")
        )


# ── Command failures ────────────────────────────────────────────────


class TestCommandFailures:
    def test_nonzero_exit_still_counts_as_executed(self):
        rig = Rig(UBUNTU, FakeHost({"ip"}))
        rig.adapter.set_failure("ip addr", error="boom", exit_code=2)
        result = rig.engine.run_probe(_interfaces())
        assert result.outcome is StepOutcome.EXECUTED
        assert "Error: 'ip addr' exited with code 2" in rig.transcript.messages("failure")
        assert rig.adapter.commands == ["ip addr"]

    def test_fallback_on_failure(self):
        rig = Rig(WINDOWS, FakeHost({"net", "wmic"}))
        rig.adapter.set_failure("net group Domain Computers /domain", exit_code=2)
        result = rig.engine.run_probe(remote_system_discovery(DiscoveryConfig()).probes[0])
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_COMMAND
        assert rig.adapter.commands == [
            "net group Domain Computers /domain",
            "wmic computersystem get name",
        ]
        assert (
            "'net group' command failed. Attempting to use WMIC as fallback."
            in rig.transcript.messages("warning")
        )

    def test_failed_command_is_never_retried(self):
        rig = Rig(WINDOWS, FakeHost({"net"}))
        rig.adapter.set_failure("net group Domain Computers /domain", exit_code=2)
        result = rig.engine.run_probe(remote_system_discovery(DiscoveryConfig()).probes[0])
        assert rig.adapter.commands == ["net group Domain Computers /domain"]
        assert result.outcome is StepOutcome.SKIPPED_NO_TOOL

    def test_failure_hint_replaces_error(self):
        rig = Rig(WINDOWS, FakeHost({"pwsh"}))
        rig.adapter.set_failure("pwsh", error="module not found")
        rig.engine.run_probe(network_share_discovery(DiscoveryConfig()).probes[0])
        assert (
            "Failed to execute 'Invoke-ShareFinder'. Ensure PowerView is installed."
            in rig.transcript.messages("warning")
        )
        assert rig.transcript.messages("failure") == []

    def test_powershell_fallback(self):
        rig = Rig(WINDOWS, FakeHost({"powershell"}))
        result = rig.engine.run_probe(network_share_discovery(DiscoveryConfig()).probes[0])
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_TOOL
        assert rig.adapter.call_log[0].action.argv == [
            "powershell", "-Command", "Import-Module PowerView; Invoke-ShareFinder",
        ]


# ── Platform-specific chains ────────────────────────────────────────


class TestPlatformChains:
    def test_macos_remote_discovery_without_scanners(self):
        rig = Rig(MACOS, FakeHost({"brew"}))
        result = rig.engine.run_probe(remote_system_discovery(DiscoveryConfig()).probes[0])
        assert result.outcome is StepOutcome.SKIPPED_NO_TOOL
        assert rig.adapter.call_count == 0
        assert rig.ensurer.install_attempts == 0
        assert (
            "No network scanning tools found on macOS. Skipping remote system discovery."
            in rig.transcript.messages("warning")
        )
        assert rig.transcript.messages("hint") == [
            "Consider installing 'nmap' using Homebrew:",
            "brew install nmap",
        ]

    def test_linux_remote_discovery_installs_scanner(self):
        host = FakeHost({"apt-get"}, packages={"nmap": ("nmap",)})
        rig = Rig(UBUNTU, host)
        result = rig.engine.run_probe(remote_system_discovery(DiscoveryConfig()).probes[0])
        assert rig.adapter.commands[-1] == "nmap -sn 192.168.1.0/24"
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_TOOL
        assert (
            "Executing 'nmap -sn 192.168.1.0/24' after installation:"
            in rig.transcript.messages("command")
        )

    def test_hardware_preamble_always_runs(self):
        rig = Rig(UBUNTU, FakeHost({"lshw"}))
        result = rig.engine.run_probe(system_information().probes[0])
        assert rig.adapter.commands == ["uname -a", "lshw"]
        assert rig.adapter.call_log[1].action.elevate
        assert result.outcome is StepOutcome.EXECUTED

    def test_hardware_falls_back_to_dmidecode(self):
        rig = Rig(GENERIC_LINUX, FakeHost({"dmidecode"}))
        result = rig.engine.run_probe(system_information().probes[0])
        assert rig.adapter.commands == ["uname -a", "dmidecode"]
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_TOOL

    def test_no_hardware_tool_is_a_warning(self):
        rig = Rig(GENERIC_LINUX, FakeHost())
        rig.engine.run_probe(system_information().probes[0])
        assert (
            "Warning: No detailed hardware info tool found. Skipping detailed hardware info."
            in rig.transcript.messages("warning")
        )

    def test_user_discovery_on_any_family(self):
        rig = Rig(UNKNOWN, FakeHost())
        result = rig.engine.run_step(user_discovery())
        assert result.outcome is StepOutcome.EXECUTED
        assert rig.adapter.commands == ["whoami", "users"]

    def test_password_policy_reads_login_defs(self, tmp_path: Path):
        login_defs = tmp_path / "login.defs"
        login_defs.write_text("PASS_MAX_DAYS 99999\n")
        config = DiscoveryConfig()
        config.paths.login_defs = str(login_defs)
        rig = Rig(UBUNTU, FakeHost())
        result = rig.engine.run_probe(password_policy_discovery(config).probes[0])
        assert result.outcome is StepOutcome.EXECUTED
        assert rig.adapter.commands == [f"cat {login_defs}"]
        assert (
            f"Displaying local password policies from '{login_defs}':"
            in rig.transcript.messages("command")
        )

    def test_password_policy_missing_file(self, tmp_path: Path):
        config = DiscoveryConfig()
        config.paths.login_defs = str(tmp_path / "absent")
        rig = Rig(UBUNTU, FakeHost())
        result = rig.engine.run_probe(password_policy_discovery(config).probes[0])
        assert result.outcome is StepOutcome.SKIPPED_NO_TOOL
        assert rig.adapter.call_count == 0
        assert rig.transcript.messages("failure") == [f"Error: '{tmp_path / 'absent'}' not found."]


# ── Steps ───────────────────────────────────────────────────────────


class TestRunStep:
    def test_heading_and_blank_line(self):
        rig = Rig(UBUNTU, FakeHost())
        rig.engine.run_step(user_discovery())
        assert rig.transcript.events[0] == (
            "heading", "=== System Owner / User Discovery (T1033) ===",
        )
        assert rig.transcript.events[-1] == ("blank", "")

    def test_outcome_is_worst_probe(self):
        rig = Rig(MACOS, FakeHost({"ifconfig", "netstat", "df"}))
        result = rig.engine.run_step(network_configuration())
        assert [p.outcome for p in result.probes] == [
            StepOutcome.EXECUTED_VIA_FALLBACK_TOOL,
            StepOutcome.EXECUTED,
            StepOutcome.EXECUTED,
        ]
        assert result.outcome is StepOutcome.EXECUTED_VIA_FALLBACK_TOOL

    def test_crashing_probe_does_not_escape(self):
        def broken_which(name):
            raise RuntimeError("PATH exploded")

        rig = Rig(UBUNTU, FakeHost())
        rig.engine._prober = CapabilityProber(which=broken_which)
        step = DiscoveryStep(
            technique="T0000",
            title="Broken",
            probes=(_interfaces(), user_discovery().probes[0]),
        )
        result = rig.engine.run_step(step)
        assert result.probes[0].outcome is StepOutcome.SKIPPED_NO_TOOL
        assert "PATH exploded" in result.probes[0].errors[0]
        assert result.probes[1].outcome is StepOutcome.EXECUTED
