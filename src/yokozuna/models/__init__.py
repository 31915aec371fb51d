"""Request and response models."""

from yokozuna.models.descriptor import (
    AnyRequest,
    AssociateIndexRequest,
    ClientDefaults,
    CreateIndexRequest,
    CreateSchemaRequest,
    DestroyIndexRequest,
    DisassociateIndexRequest,
    QueryRequest,
    RequestDescriptor,
    build_descriptor,
    merge_layers,
)
from yokozuna.models.response import ResponseMeta

__all__ = [
    "AnyRequest",
    "AssociateIndexRequest",
    "ClientDefaults",
    "CreateIndexRequest",
    "CreateSchemaRequest",
    "DestroyIndexRequest",
    "DisassociateIndexRequest",
    "QueryRequest",
    "RequestDescriptor",
    "ResponseMeta",
    "build_descriptor",
    "merge_layers",
]
