import asyncio
import json
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..datasource import ReadResponse, VersionsDataSource
from ..domain.models import VersionEntry, VersionMetadata
from ..schema.versions import METADATA, PACKAGE, RAW_METADATA


class VersionsInfoService:
    """handles fetching and displaying version metadata for packages."""

    def __init__(self, data_source: VersionsDataSource, console: Optional[Console] = None):
        self.data_source = data_source
        self.console = console or Console()

    async def fetch_all(self, packages: List[str]) -> Dict[str, ReadResponse]:
        """
        read every package concurrently.

        args:
            packages: package names, duplicates are read once

        returns:
            dict of package name to its read response, in input order
        """
        unique = list(dict.fromkeys(packages))
        responses = await asyncio.gather(
            *(asyncio.to_thread(self.data_source.read, {PACKAGE: p}) for p in unique)
        )
        return dict(zip(unique, responses))

    def show(
        self,
        package_name: str,
        response: ReadResponse,
        version: Optional[str] = None,
        fips: bool = False,
    ) -> bool:
        """
        display one read response.

        returns:
            True if the read succeeded
        """
        if response.has_error:
            for diagnostic in response.diagnostics:
                self.console.print(f"[red]Error:[/red] {escape(str(diagnostic))}")
            return False

        metadata = self._metadata_from_state(response.state)

        if version:
            entry = metadata.find(version, fips=fips)
            if entry is None:
                variant = " (fips)" if fips else ""
                self.console.print(
                    f"[yellow]Version '{escape(version)}'{variant} not found for '{escape(package_name)}'.[/yellow]"
                )
                return True
            self.console.print(self._entry_panel(package_name, entry))
            return True

        grid = Table.grid(expand=True)
        grid.add_column(style="bold cyan", justify="right")
        grid.add_column(style="white")
        grid.add_row("Latest:", metadata.latest_version or "-")
        grid.add_row("Last updated:", metadata.last_updated_timestamp or "-")
        grid.add_row("Versions:", str(len(metadata.versions)))
        grid.add_row("EOL versions:", str(len(metadata.eol_versions)))

        self.console.print(Panel(grid, title=f"📦 {package_name}", border_style="cyan"))
        if metadata.versions:
            self.console.print(self._versions_table(metadata.versions))
        return True

    def show_json(self, responses: Dict[str, ReadResponse]) -> bool:
        out = {}
        ok = True
        for name, response in responses.items():
            if response.has_error:
                ok = False
            out[name] = response.model_dump(mode="json")
        self.console.print_json(json.dumps(out))
        return ok

    def _metadata_from_state(self, state: dict) -> VersionMetadata:
        # either encoding round-trips through the canonical model for display
        if state.get(METADATA) is not None:
            return VersionMetadata.model_validate(state[METADATA])
        return VersionMetadata.model_validate_json(state[RAW_METADATA])

    def _versions_table(self, versions) -> Table:
        table = Table(title="Versions")
        table.add_column("Version", style="cyan")
        table.add_column("Exists")
        table.add_column("FIPS")
        table.add_column("LTS", style="green")
        table.add_column("Released", style="dim")
        table.add_column("EOL", style="red")

        for entry in versions:
            table.add_row(
                entry.version,
                "yes" if entry.exists else "no",
                "yes" if entry.fips else "",
                entry.lts,
                entry.release_date,
                entry.eol_date,
            )
        return table

    def _entry_panel(self, package_name: str, entry: VersionEntry) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(style="bold cyan", justify="right")
        grid.add_column(style="white")
        grid.add_row("Version:", entry.version)
        grid.add_row("Exists:", "yes" if entry.exists else "no")
        grid.add_row("FIPS:", "yes" if entry.fips else "no")
        grid.add_row("LTS:", entry.lts if entry.is_lts else "no")
        grid.add_row("Released:", entry.release_date or "unknown")
        grid.add_row("EOL:", entry.eol_date or "not announced")
        return Panel(grid, title=f"📦 {package_name}@{entry.version}", border_style="cyan")
