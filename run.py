"""Entry point for the knowledge graph dashboard sync client."""

import argparse
import asyncio
import logging
import sys

from kgsync.api import ApiClient, ChunkAPI, DocumentAPI, StorageClient, WorkspaceAPI
from kgsync.config import AppConfig, load_config
from kgsync.errors import TransportFailure
from kgsync.models import FilterSet, SortOrder, UploadFile, UploadSession, UploadStatus
from kgsync.preferences import PreferencesService
from kgsync.storage import PersistentKeyedStore, StorageArea
from kgsync.sync import (
    ChunkView,
    PaginatedFetcher,
    UploadOrchestrator,
    WorkspaceRefCache,
)

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List chunks or upload a document.")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--workspace", help="Workspace id to scope to")
    parser.add_argument("--data-type", choices=["string", "object"])
    parser.add_argument(
        "--order",
        choices=["asc", "desc"],
        help="Sort order (defaults to sync.default_order from the config)",
    )
    parser.add_argument("--document-id")
    parser.add_argument("--upload", metavar="PATH", help="Upload a file to --workspace")
    parser.add_argument(
        "--process",
        action="store_true",
        help="Start ingestion after a successful upload",
    )
    return parser.parse_args(argv)


def build_filters(config: AppConfig, args: argparse.Namespace) -> FilterSet:
    if args.order is None:
        order = SortOrder(config.sync.default_order)
    else:
        order = SortOrder.ASCENDING if args.order == "asc" else SortOrder.DESCENDING
    return FilterSet(
        data_type=args.data_type, order=order, document_id=args.document_id
    )


async def list_chunks(
    config: AppConfig, client: ApiClient, args: argparse.Namespace
) -> int:
    fetcher = PaginatedFetcher(ChunkAPI(client), page_size=config.sync.page_size)
    view = ChunkView(
        fetcher,
        WorkspaceRefCache(WorkspaceAPI(client)),
        workspace_id=args.workspace,
        filters=build_filters(config, args),
    )
    await view.load()
    if view.error:
        logger.error("Could not load chunks: %s", view.error)
        return 1

    names = {ref.id: ref.name for ref in view.workspaces}
    scope = names.get(args.workspace, args.workspace) or "all workspaces"
    print(f"{view.total} chunk(s) in {scope}")
    for chunk in view.chunks:
        source = chunk.document_filename or "-"
        print(f"  {chunk.id}  [{chunk.data_type}]  {source}")
    return 0


async def upload_file(
    config: AppConfig, client: ApiClient, args: argparse.Namespace
) -> int:
    if not args.workspace:
        logger.error("--upload requires --workspace")
        return 2

    try:
        file = UploadFile.from_path(args.upload)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.upload, e)
        return 1

    documents = DocumentAPI(client)
    storage = StorageClient()

    def report(session: UploadSession) -> None:
        print(f"Uploaded {session.file.filename} as document {session.document_id}")

    orchestrator = UploadOrchestrator(
        documents,
        storage,
        resource_id_field=config.upload.resource_id_field,
        on_complete=report,
        allowed_extensions=config.upload.allowed_extensions,
    )
    try:
        orchestrator.select_file(file)
        session = await orchestrator.upload(args.workspace)
    except ValueError as e:
        logger.error("Cannot upload %s: %s", file.filename, e)
        return 1
    finally:
        await storage.aclose()

    if session.status is not UploadStatus.COMPLETED:
        logger.error("Upload failed: %s", session.error)
        return 1
    if args.process:
        try:
            await documents.process_document(session.document_id)
        except TransportFailure as e:
            logger.error("Could not start processing: %s", e)
            return 1
        print(f"Processing started for document {session.document_id}")
    return 0


async def run(config: AppConfig, args: argparse.Namespace) -> int:
    async with ApiClient.from_config(config) as client:
        if args.upload:
            return await upload_file(config, client, args)
        return await list_chunks(config, client, args)


def main(argv: list[str] | None = None) -> int:
    """Load configuration, prepare local storage, and run the requested command."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    args = parse_args(argv)
    config = load_config(args.config)

    area = StorageArea(config.storage.sqlite_path)
    context = area.open_context()
    preferences = PreferencesService(
        PersistentKeyedStore(
            context, config.storage.preferences_key, PreferencesService.default_value()
        )
    )
    logger.info("Display preferences: %s", preferences.current)

    try:
        return asyncio.run(run(config, args))
    finally:
        context.close()


if __name__ == "__main__":
    sys.exit(main())
