"""
Tests for flag binding: which options reach which commands, with what
defaults, and how a parsed value flows back into the shared context.
"""

from datetime import timedelta

import click
import pytest

from roachcli.cli.binder import (
    DEFAULT_PASSES,
    RegistrationPass,
    bind_all,
    build_flag_sets,
    install_flags,
)
from roachcli.cli.errors import (
    BindingError,
    ConflictingBindingError,
    DuplicateFlagError,
    InvalidDefaultError,
)
from roachcli.cli.groups import (
    CERT_COMMANDS,
    CLIENT_COMMANDS,
    NODE_COMMANDS,
    CommandId,
)
from roachcli.core.config.registry import (
    CERTS,
    CLIENT_ADDR,
    NODE_OPTIONS,
    FieldAccessor,
    OptionDescriptor,
    OptionKind,
)
from roachcli.core.context import Context

NODE_ONLY = {option.name for option in NODE_OPTIONS} - {"addr"}


def _dummy_commands(ids):
    return {command_id: click.Command(command_id.display_name) for command_id in ids}


class TestNodeCommands:
    def test_node_flags_and_defaults(self, context):
        flag_sets = build_flag_sets(context)
        for command_id in NODE_COMMANDS:
            flag_set = flag_sets[command_id]
            assert flag_set.names() == [o.name for o in NODE_OPTIONS] + [
                "insecure",
                "certs",
            ]
            for option in NODE_OPTIONS:
                assert flag_set.get(option.name).default == option.field.get(context)

    def test_node_addr_uses_server_wording(self, context):
        bound = build_flag_sets(context)[CommandId.START].get("addr")
        assert bound.descriptor.help.startswith("the host:port to bind")

    def test_defaults_follow_current_context_values(self):
        context = Context(max_offset=timedelta(seconds=1), gossip_bootstrap="self=")
        flag_set = build_flag_sets(context)[CommandId.START]
        assert flag_set.get("max-offset").default == timedelta(seconds=1)
        assert flag_set.get("gossip").default == "self="


class TestClientCommands:
    def test_client_commands_get_addr_without_node_options(self, context):
        flag_sets = build_flag_sets(context)
        for command_id in CLIENT_COMMANDS:
            flag_set = flag_sets[command_id]
            assert flag_set.names() == ["addr", "insecure", "certs"]
            assert flag_set.get("addr").default == context.addr
            assert flag_set.get("addr").descriptor is CLIENT_ADDR
            assert not NODE_ONLY & set(flag_set.names())


class TestSecurityFlags:
    def test_insecure_and_certs_on_every_cluster_command(self, context):
        flag_sets = build_flag_sets(context)
        for command_id in NODE_COMMANDS + CLIENT_COMMANDS:
            assert flag_sets[command_id].get("insecure").default is False
            assert flag_sets[command_id].get("certs").default == ""

    def test_cert_commands_only_get_certs(self, context):
        flag_sets = build_flag_sets(context)
        for command_id in CERT_COMMANDS:
            assert flag_sets[command_id].names() == ["certs"]

    def test_every_command_is_bound(self, context):
        assert set(build_flag_sets(context)) == set(CommandId)


class TestBindingInvariants:
    def test_binding_twice_yields_identical_defaults(self, context):
        first = build_flag_sets(context)
        second = build_flag_sets(context)
        assert first is not second
        for command_id, flag_set in first.items():
            assert flag_set is not second[command_id]
            assert flag_set.defaults() == second[command_id].defaults()

    def test_no_name_maps_to_divergent_fields(self):
        for command_id in CommandId:
            fields_by_name = {}
            for registration in DEFAULT_PASSES:
                if command_id not in registration.scope:
                    continue
                for option in registration.options:
                    previous = fields_by_name.setdefault(option.name, option.field)
                    assert previous == option.field, (command_id, option.name)

    def test_pass_scope_deduplicates_groups(self):
        registration = RegistrationPass(
            "certs", (NODE_COMMANDS, CERT_COMMANDS, NODE_COMMANDS), (CERTS,)
        )
        assert registration.scope == NODE_COMMANDS + CERT_COMMANDS

    def test_command_listed_in_two_groups_gets_one_certs_flag(self, context):
        misconfigured_certs = CERT_COMMANDS + (CommandId.START,)
        passes = DEFAULT_PASSES[:3] + (
            RegistrationPass(
                "certs", (NODE_COMMANDS, CLIENT_COMMANDS, misconfigured_certs), (CERTS,)
            ),
            RegistrationPass("certs-again", (misconfigured_certs,), (CERTS,)),
        )
        flag_sets = build_flag_sets(context, passes)
        assert flag_sets[CommandId.START].names().count("certs") == 1

    def test_same_name_on_different_field_is_rejected(self, context):
        rogue = OptionDescriptor("certs", OptionKind.STRING, FieldAccessor("attrs"))
        passes = DEFAULT_PASSES + (RegistrationPass("rogue", (NODE_COMMANDS,), (rogue,)),)
        with pytest.raises(ConflictingBindingError) as excinfo:
            build_flag_sets(context, passes)
        assert excinfo.value.command is CommandId.START
        assert excinfo.value.name == "certs"

    def test_invalid_context_value_is_rejected(self):
        with pytest.raises(InvalidDefaultError) as excinfo:
            build_flag_sets(Context(cache_size="1GiB"))
        assert excinfo.value.name == "cache-size"


class TestInstallFlags:
    def test_cache_size_default_and_write_back(self):
        context = Context(cache_size=1073741824)
        commands = _dummy_commands(NODE_COMMANDS)
        bind_all(context, commands, passes=DEFAULT_PASSES[:1])

        start = commands[CommandId.START]
        option = next(p for p in start.params if p.name == "cache_size")
        assert option.default == 1073741824

        start.main(["--cache-size=500"], standalone_mode=False)
        assert context.cache_size == 500

    def test_defaults_are_not_written_back(self):
        context = Context()
        commands = _dummy_commands(NODE_COMMANDS)
        bind_all(context, commands, passes=DEFAULT_PASSES[:1])

        context.addr = "10.0.0.1:8080"
        commands[CommandId.QUIT].main([], standalone_mode=False)
        assert context.addr == "10.0.0.1:8080"

    def test_every_kind_writes_through(self):
        context = Context()
        commands = _dummy_commands(NODE_COMMANDS)
        bind_all(context, commands, passes=DEFAULT_PASSES[:1])

        commands[CommandId.START].main(
            [
                "--stores=ssd=/mnt/ssd01",
                "--max-offset=1s",
                "--gossip-interval",
                "500ms",
                "--linearizable",
                "--scan-interval=1h",
            ],
            standalone_mode=False,
        )
        assert context.stores == "ssd=/mnt/ssd01"
        assert context.max_offset == timedelta(seconds=1)
        assert context.gossip_interval == timedelta(milliseconds=500)
        assert context.linearizable is True
        assert context.scan_interval == timedelta(hours=1)

    def test_malformed_value_is_a_usage_error(self):
        context = Context()
        commands = _dummy_commands(NODE_COMMANDS)
        bind_all(context, commands, passes=DEFAULT_PASSES[:1])

        with pytest.raises(click.BadParameter):
            commands[CommandId.START].main(["--max-offset=soon"], standalone_mode=False)
        assert context.max_offset == timedelta(milliseconds=250)

    def test_out_of_range_duration_is_a_usage_error(self):
        context = Context()
        commands = _dummy_commands(NODE_COMMANDS)
        bind_all(context, commands, passes=DEFAULT_PASSES[:1])

        with pytest.raises(click.BadParameter, match="out of range"):
            commands[CommandId.START].main(
                ["--max-offset=100000000000000h"], standalone_mode=False
            )
        assert context.max_offset == timedelta(milliseconds=250)

    def test_existing_param_with_same_name_is_rejected(self, context):
        commands = _dummy_commands(CERT_COMMANDS)
        commands[CommandId.CERT_CREATE_CA].params.append(click.Option(["--certs"]))
        flag_sets = build_flag_sets(context, DEFAULT_PASSES[3:])
        cert_only = {k: v for k, v in flag_sets.items() if k in CERT_COMMANDS}
        with pytest.raises(DuplicateFlagError):
            install_flags(commands, cert_only, context)

    def test_missing_command_is_rejected(self, context):
        with pytest.raises(BindingError, match="no command registered"):
            bind_all(context, _dummy_commands(NODE_COMMANDS))
