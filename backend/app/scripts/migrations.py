"""
One-off Firestore data migrations for the CRM collections.

Run with ``salesgen-migrate --help``. Credentials come from
FIREBASE_SERVICE_ACCOUNT_KEY, a well-known service-account file in the
working directory, or application default credentials.
"""
import logging
from dataclasses import dataclass, field
from typing import Any

import typer
from firebase_admin import firestore
from rich import print

from app.core.config import settings
from app.services.firebase import initialize_firebase

logger = logging.getLogger(__name__)

BATCH_LIMIT = 500

# Leads live in the customers collection with customerType "lead".
FIELD_MAPPINGS: dict[str, dict[str, str]] = {
    "customers": {
        "assignedTo": "assignedToUserId",
        "assignedToId": "assignedToUserId",
        "assignedToName": "assignedToUserName",
        "userId": "createdByUserId",
        "userName": "createdByUserName",
    },
    "tasks": {
        "assignedTo": "assignedToUserId",
        "assignedToId": "assignedToUserId",
    },
    "salesTasks": {
        "assignedTo": "assignedToUserId",
        "assignedToId": "assignedToUserId",
        "assignedToName": "assignedToUserName",
    },
}


@dataclass
class MigrationReport:
    updated: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.updated.values())


@dataclass
class CollectionReport:
    total_documents: int = 0
    documents_with_legacy_fields: int = 0
    legacy_fields: dict[str, int] = field(default_factory=dict)
    new_fields: dict[str, int] = field(default_factory=dict)


def plan_field_updates(data: dict[str, Any], mappings: dict[str, str]) -> dict[str, Any]:
    """Map every non-null legacy field to its new name and mark the legacy field for deletion."""
    updates: dict[str, Any] = {}
    for old_field, new_field in mappings.items():
        if data.get(old_field) is not None:
            updates[new_field] = data[old_field]
            updates[old_field] = firestore.DELETE_FIELD
    return updates


class BatchWriter:
    """Accumulates updates and commits a Firestore batch every ``limit`` writes."""

    def __init__(self, db: firestore.Client, limit: int = BATCH_LIMIT):
        self.db = db
        self.limit = limit
        self.batch = db.batch()
        self.pending = 0
        self.commits = 0

    def update(self, ref, updates: dict[str, Any]) -> None:
        self.batch.update(ref, updates)
        self.pending += 1
        if self.pending >= self.limit:
            self.flush()

    def flush(self) -> None:
        if not self.pending:
            return
        self.batch.commit()
        logger.info("Committed batch of %s updates", self.pending)
        self.commits += 1
        self.pending = 0
        self.batch = self.db.batch()


def migrate_collection(
    db: firestore.Client,
    collection: str,
    mappings: dict[str, str],
    *,
    dry_run: bool = False,
    batch_limit: int = BATCH_LIMIT,
) -> int:
    """Rename legacy fields in one collection; returns the number of documents touched."""
    writer = BatchWriter(db, batch_limit)
    updated = 0
    for snapshot in db.collection(collection).stream():
        updates = plan_field_updates(snapshot.to_dict() or {}, mappings)
        if not updates:
            continue
        updated += 1
        if dry_run:
            logger.info("[dry run] %s/%s: %s", collection, snapshot.id, sorted(updates))
            continue
        writer.update(snapshot.reference, updates)
    writer.flush()
    return updated


def rename_legacy_fields(
    db: firestore.Client,
    field_mappings: dict[str, dict[str, str]] = FIELD_MAPPINGS,
    *,
    dry_run: bool = False,
    batch_limit: int = BATCH_LIMIT,
) -> MigrationReport:
    report = MigrationReport()
    for collection, mappings in field_mappings.items():
        try:
            report.updated[collection] = migrate_collection(
                db, collection, mappings, dry_run=dry_run, batch_limit=batch_limit
            )
        except Exception as exc:
            logger.exception("Error migrating %s", collection)
            report.errors.append(f"Error migrating {collection}: {exc}")
    return report


def validate_collection(db: firestore.Client, collection: str, mappings: dict[str, str]) -> CollectionReport:
    report = CollectionReport(
        legacy_fields={old: 0 for old in mappings},
        new_fields={new: 0 for new in dict.fromkeys(mappings.values())},
    )
    for snapshot in db.collection(collection).stream():
        data = snapshot.to_dict() or {}
        report.total_documents += 1
        has_legacy = False
        for old_field in mappings:
            if data.get(old_field) is not None:
                report.legacy_fields[old_field] += 1
                has_legacy = True
        for new_field in report.new_fields:
            if data.get(new_field) is not None:
                report.new_fields[new_field] += 1
        if has_legacy:
            report.documents_with_legacy_fields += 1
    return report


def assign_default_owner(
    db: firestore.Client,
    *,
    user_id: str,
    user_name: str,
    collection: str = "customers",
    dry_run: bool = False,
    batch_limit: int = BATCH_LIMIT,
) -> tuple[int, int]:
    """Assign every document to one user and fill blank creator names.

    Returns (documents assigned, creator names filled).
    """
    writer = BatchWriter(db, batch_limit)
    assigned = filled = 0
    for snapshot in db.collection(collection).stream():
        data = snapshot.to_dict() or {}
        updates: dict[str, Any] = {"assignedToUserId": user_id, "assignedToUserName": user_name}
        creator = data.get("createdByUserName")
        if not isinstance(creator, str) or not creator.strip():
            updates["createdByUserName"] = user_name
            filled += 1
        assigned += 1
        if not dry_run:
            writer.update(snapshot.reference, updates)
    writer.flush()
    return assigned, filled


app = typer.Typer(help="Firestore data migrations for the CRM collections.")


def _client() -> firestore.Client:
    return firestore.client(initialize_firebase(settings))


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every batch commit.")):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)


@app.command("rename-fields")
def rename_fields(
    dry_run: bool = typer.Option(False, "--dry-run", help="Report what would change without writing."),
):
    """Move legacy user fields to their assignedToUser*/createdByUser* names."""
    report = rename_legacy_fields(_client(), dry_run=dry_run)

    print("[bold]Field migration summary[/bold]" + (" [yellow](dry run)[/yellow]" if dry_run else ""))
    for collection, count in report.updated.items():
        print(f"- {collection}: {count} documents updated")
    print(f"total: {report.total}")
    if report.errors:
        for error in report.errors:
            print(f"[red]- {error}[/red]")
        raise typer.Exit(code=1)


@app.command()
def validate():
    """Report how many documents still carry legacy fields."""
    db = _client()
    remaining = 0
    for collection, mappings in FIELD_MAPPINGS.items():
        report = validate_collection(db, collection, mappings)
        remaining += report.documents_with_legacy_fields
        print(f"\n[bold]{collection}[/bold] ({report.total_documents} documents)")
        print(f"documents with legacy fields: {report.documents_with_legacy_fields}")
        for name, count in report.legacy_fields.items():
            print(f"- legacy {name}: {count}")
        for name, count in report.new_fields.items():
            print(f"- {name}: {count}")

    if remaining:
        print(f"\n[yellow]{remaining} documents still need migration.[/yellow]")
    else:
        print("\n[green]No legacy fields remain.[/green]")


@app.command("assign-defaults")
def assign_defaults(
    user_id: str = typer.Option(..., "--user-id", help="uid to assign every customer to."),
    user_name: str = typer.Option(..., "--user-name", help="Display name for the assignee and blank creators."),
    dry_run: bool = typer.Option(False, "--dry-run"),
):
    """Assign all customers to one user and fill empty createdByUserName."""
    assigned, filled = assign_default_owner(_client(), user_id=user_id, user_name=user_name, dry_run=dry_run)
    print(f"assigned: {assigned}")
    print(f"createdByUserName filled: {filled}")


if __name__ == "__main__":
    app()
