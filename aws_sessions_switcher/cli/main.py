"""Main CLI entry point for aws-sessions-switcher."""

from typing import List, Optional
import click
from loguru import logger
from .. import __version__
from ..services.cli_service import CLIService, PROGRAM_NAME
from ..services.env_config import SwitcherConfig
from ..services.errors import SwitcherError
from ..services.formatting import green_text, print_table, yellow_text
from .utils import configure_logging, handle_errors


def get_service(ctx: click.Context) -> CLIService:
    """Return the CLIService stored on the root context, creating it on first use."""
    root = ctx.find_root()
    if root.obj is None:
        root.obj = CLIService()
    return root.obj


def _configured_projects(ctx: click.Context) -> List[str]:
    service = get_service(ctx)
    if not service.config_store.exists():
        return []
    try:
        return service.config_store.list_projects()
    except SwitcherError as e:
        logger.debug(f"Project commands unavailable: {e}")
        return []


def _project_command(project_name: str) -> click.Command:
    """Build the ``<project> [<env> [<role>]]`` command for a configured project."""

    @click.command(name=project_name, help=f"Assume a role configured for project '{project_name}'.")
    @click.argument('environment', required=False)
    @click.argument('role', required=False)
    @click.pass_context
    @handle_errors
    def project_command(ctx, environment: Optional[str], role: Optional[str]):
        service = get_service(ctx)
        if environment is None:
            for env in service.environments_list(project_name):
                click.echo(green_text(f"- {env}"))
            return

        if role is None:
            for record in service.roles_list(project_name, environment):
                click.echo(f"{record.role_name} => {record.role_arn}")
            return

        service.assume(project_name, environment, role)
        click.echo(green_text('- SUCCESS!'))

    return project_command


class SwitcherGroup(click.Group):
    """Command group that also resolves configured project names as commands."""

    def list_commands(self, ctx):
        builtin = super().list_commands(ctx)
        return builtin + [p for p in _configured_projects(ctx) if p not in builtin]

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        if cmd_name in _configured_projects(ctx):
            return _project_command(cmd_name)
        return None


def _print_assumptions(service: CLIService) -> None:
    rows = service.assumptions()
    if rows:
        print_table(['assumptions', 'command_to_run'], rows)
    else:
        click.echo(yellow_text(f'No AWS role assumptions configured. Run `{PROGRAM_NAME} configure` to set up.'))


@click.group(cls=SwitcherGroup, invoke_without_command=True,
             context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(__version__, prog_name=PROGRAM_NAME)
@click.option('-l', '--list', 'list_assumptions', is_flag=True, help='Lists all the role assumptions that you can make')
@click.option('--debug', is_flag=True, help='Show debug logging')
@click.pass_context
@handle_errors
def cli(ctx, list_assumptions: bool, debug: bool):
    """A tool to help switching between multiple AWS environments easy and seamless."""
    configure_logging(debug or SwitcherConfig.debug_enabled())
    if ctx.invoked_subcommand is None:
        _print_assumptions(get_service(ctx))


@cli.command('configure')
@click.pass_context
@handle_errors
def configure(ctx):
    """Configure aws-sessions-switcher for initial run."""
    get_service(ctx).configure()


@cli.group(invoke_without_command=True)
@click.pass_context
@handle_errors
def projects(ctx):
    """Manage project configurations."""
    if ctx.invoked_subcommand is None:
        _list_projects(ctx)


def _list_projects(ctx: click.Context) -> None:
    for project in get_service(ctx).projects_list():
        click.echo(green_text(f"- {project}"))


@projects.command('ls')
@click.pass_context
@handle_errors
def list_projects(ctx):
    """List all configured projects."""
    _list_projects(ctx)


@projects.command('add')
@click.pass_context
@handle_errors
def add_project(ctx):
    """Add a new project configuration."""
    get_service(ctx).project_add()


@projects.command('delete')
@click.option('-n', '--project-name', required=True, help='Name of the project to be deleted')
@click.option('--exact', is_flag=True, help='Only delete sections whose project name matches exactly')
@click.pass_context
@handle_errors
def delete_project(ctx, project_name: str, exact: bool):
    """
    Delete a project configuration.

    Without --exact every section whose name contains PROJECT_NAME is removed.
    """
    get_service(ctx).project_delete(project_name, exact=exact)


@click.group(invoke_without_command=True)
@click.option('-n', '--project-name', help='Name of the project')
@click.pass_context
@handle_errors
def environments(ctx, project_name: Optional[str]):
    """Manage environment configurations."""
    if ctx.invoked_subcommand is None:
        for env in get_service(ctx).environments_list(project_name):
            click.echo(green_text(f"- {env}"))


@environments.command('add')
@click.option('-n', '--project-name', required=True,
              help='Name of the project in which an environment needs to be added')
def add_environment(project_name: str):
    """Add a new environment to a project."""
    click.echo(yellow_text('Not supported currently. It will be available in later versions...'))


@environments.command('delete')
@click.option('-n', '--project-name', required=True,
              help='Name of the project in which an environment needs to be deleted')
@click.option('-e', '--env-name', required=True, help='Name of the environment to delete')
def delete_environment(project_name: str, env_name: str):
    """Delete an environment from a project."""
    click.echo(yellow_text('Not supported currently. It will be available in later versions...'))


cli.add_command(environments, 'env')
cli.add_command(environments, 'environments')


@cli.group(invoke_without_command=True)
@click.option('-n', '--project-name', help='Only list sessions of the environments configured for this project')
@click.pass_context
@handle_errors
def sessions(ctx, project_name: Optional[str]):
    """List active AWS sessions."""
    if ctx.invoked_subcommand is not None:
        return

    rows = get_service(ctx).sessions_list(project_name)
    if not rows:
        click.echo(yellow_text(
            f'- No active sessions present. Run `{PROGRAM_NAME} -l` to see all possible role assumptions you can make'
        ))
        return

    print_table(
        ['session_name', 'remaining_time', 'configured_to_be_used_with_aws_command'],
        [(key, remaining, 'Yes' if active else 'No') for key, remaining, active in rows],
    )
    click.echo(
        f"Note: If {yellow_text('`configured_to_be_used_with_aws_command`')} is No,\n"
        f"run {green_text(f'`{PROGRAM_NAME} sessions switch`')} and select this session to activate it"
    )


@sessions.command('switch')
@click.argument('session_name', required=False)
@click.pass_context
@handle_errors
def switch_session(ctx, session_name: Optional[str]):
    """Switch between active AWS sessions."""
    activated = get_service(ctx).session_switch(session_name)
    click.echo(f"Switched to => {green_text(activated)}")


@cli.command('reset')
@click.pass_context
@handle_errors
def reset(ctx):
    """Reset all configurations."""
    get_service(ctx).reset()


def main():
    # Project commands are resolved before the group callback runs
    configure_logging(SwitcherConfig.debug_enabled())
    cli()


if __name__ == '__main__':
    main()
