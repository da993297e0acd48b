"""Domain (life area) CLI commands."""

from typing import Optional

import typer

from domo.interfaces.cli.common import (
    UserOption,
    get_context,
    print_header,
    print_info,
    print_success,
    resolve_domain,
    short_id,
    unwrap,
)

app = typer.Typer(help="Domain management commands")


@app.command("list")
def list_domains(
    all_domains: bool = typer.Option(True, "--all/--active", help="Include inactive domains"),
    user: UserOption = None,
) -> None:
    """Show domains in sort order."""
    ctx = get_context(user)
    domains = unwrap(ctx.domains.list_domains(ctx.user_id, include_inactive=all_domains))

    print_header("Domains")
    if not domains:
        print_info("No domains. Run 'domo init' to create the defaults.")
        return
    for domain in domains:
        state = "" if domain.is_active else " (inactive)"
        typer.echo(f"{domain.sort_order:>3} {short_id(domain.id)} {domain.name}{state}")


@app.command("add")
def add(
    name: str = typer.Argument(..., help="Domain name"),
    inactive: bool = typer.Option(False, "--inactive", help="Create the domain switched off"),
    user: UserOption = None,
) -> None:
    """Create a domain after the last one."""
    ctx = get_context(user)
    domain, _ = unwrap(ctx.domains.create_domain(ctx.user_id, name, is_active=not inactive))
    print_success(f"Created domain {domain.name} ({short_id(domain.id)}) at {domain.sort_order}")


@app.command("rename")
def rename(
    domain_ref: str = typer.Argument(..., help="Domain name or id"),
    name: str = typer.Argument(..., help="New name"),
    user: UserOption = None,
) -> None:
    """Rename a domain."""
    ctx = get_context(user)
    domain = resolve_domain(ctx, domain_ref)
    renamed, event = unwrap(ctx.domains.rename_domain(ctx.user_id, domain.id, name))
    print_success(f"Renamed {event.old_name} -> {renamed.name}")


@app.command("activate")
def activate(domain_ref: str = typer.Argument(...), user: UserOption = None) -> None:
    """Show a domain in task views again."""
    ctx = get_context(user)
    domain = resolve_domain(ctx, domain_ref)
    unwrap(ctx.domains.set_domain_active(ctx.user_id, domain.id, True))
    print_success(f"Activated {domain.name}")


@app.command("deactivate")
def deactivate(
    domain_ref: str = typer.Argument(...),
    reassign_to: Optional[str] = typer.Option(
        None, "--reassign-to", "-r", help="Domain receiving the open tasks"
    ),
    user: UserOption = None,
) -> None:
    """Hide a domain, optionally moving its open tasks elsewhere."""
    ctx = get_context(user)
    domain = resolve_domain(ctx, domain_ref)
    target_id = resolve_domain(ctx, reassign_to).id if reassign_to else None
    _, event = unwrap(ctx.domains.set_domain_active(ctx.user_id, domain.id, False, reassign_to=target_id))
    msg = f"Deactivated {domain.name}"
    if event.reassigned_tasks:
        msg += f" ({event.reassigned_tasks} open tasks reassigned)"
    print_success(msg)


@app.command("reorder")
def reorder(
    domain_refs: list[str] = typer.Argument(..., help="Domains in the desired order"),
    user: UserOption = None,
) -> None:
    """Renumber domains; unlisted domains keep their order after these."""
    ctx = get_context(user)
    ids = [resolve_domain(ctx, ref).id for ref in domain_refs]
    unwrap(ctx.domains.reorder_domains(ctx.user_id, ids))
    print_success("Domains reordered")
