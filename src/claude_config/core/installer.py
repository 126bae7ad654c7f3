"""Install orchestrator.

For the selected mode it:
1. Picks a transport (failing before any write if none is available)
2. Walks the manifest in order, creating each parent directory
3. Fetches every file and writes it byte-for-byte to its destination
4. Updates the project's .gitignore once every file is in place

Files are processed one after another. The first failure stops the run
unless keep_going is set, in which case failures are collected and
returned. Files written before a failure stay on disk; running the install
again overwrites them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from claude_config.config.schema import TransportKind
from claude_config.core.gitignore import update_gitignore as append_gitignore_entry
from claude_config.core.manifest import InstallMode, ManifestEntry, get_manifest
from claude_config.fetch.protocols import Transport
from claude_config.fetch.selector import DEFAULT_TRANSPORTS, select_transport
from claude_config.utils.errors import FetchError, TransferError
from claude_config.utils.output import console, print_error, print_success
from claude_config.utils.paths import ensure_dir, is_within


@dataclass
class InstallResult:
    """Outcome of an install run.

    Attributes:
        mode: Install mode used
        root: Destination root the manifest was installed under
        installed: Files written, in manifest order
        failures: Entries that could not be installed (keep_going only)
        gitignore_updated: Whether the .gitignore was appended to
    """

    mode: InstallMode
    root: Path
    installed: list[Path] = field(default_factory=list)
    failures: list[TransferError] = field(default_factory=list)
    gitignore_updated: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures


async def install(
    mode: InstallMode,
    base_url: str,
    destination_root: Path,
    *,
    transport: Optional[Transport] = None,
    transports: Sequence[TransportKind] = DEFAULT_TRANSPORTS,
    keep_going: bool = False,
    update_gitignore: bool = True,
) -> InstallResult:
    """Install every manifest entry of mode under destination_root.

    Args:
        mode: Project or global install
        base_url: URL prefix the remote paths are appended to
        destination_root: Directory the local paths are relative to
        transport: Transport to use; selected from transports when omitted
        transports: Transport kinds to try, most preferred first
        keep_going: Attempt all entries and collect failures instead of
                    stopping at the first one
        update_gitignore: Append the local settings entry to an existing
                          .gitignore (project mode only)

    Returns:
        InstallResult describing what was written

    Raises:
        MissingDependencyError: If no transport is available
        TransferError: On the first failed entry, unless keep_going is set
    """
    mode = InstallMode(mode)
    if transport is None:
        transport = select_transport(transports)

    result = InstallResult(mode=mode, root=destination_root)

    for entry in get_manifest(mode):
        console.print(f"  Downloading {entry.remote}...")
        try:
            path = await install_entry(entry, base_url, destination_root, transport)
        except TransferError as e:
            if not keep_going:
                raise
            print_error(str(e))
            result.failures.append(e)
            continue
        result.installed.append(path)

    if result.failures:
        return result

    print_success("All files downloaded successfully!")

    if mode is InstallMode.PROJECT and update_gitignore:
        result.gitignore_updated = append_gitignore_entry(destination_root)
        if result.gitignore_updated:
            print_success("Updated .gitignore")

    return result


async def install_entry(
    entry: ManifestEntry, base_url: str, root: Path, transport: Transport
) -> Path:
    """Fetch one entry and write it under root.

    Returns:
        Path of the written file

    Raises:
        TransferError: If fetching or writing fails
    """
    target = entry.destination(root)
    if not is_within(target, root):
        raise TransferError(entry.local, f"destination escapes {root}")

    try:
        ensure_dir(target.parent)
        data = await transport.fetch(entry.url(base_url))
        target.write_bytes(data)
    except FetchError as e:
        raise TransferError(entry.local, e.reason) from e
    except OSError as e:
        raise TransferError(entry.local, str(e)) from e
    return target
