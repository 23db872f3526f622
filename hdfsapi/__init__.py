"""WebHDFS Python 浏览客户端 - https://hadoop.apache.org/docs/stable/hadoop-project-dist/hadoop-hdfs/WebHDFS.html"""

from hdfsapi.client import HDFSClient, Operation
from hdfsapi.errors import ConnectivityError, DecodeError, GatewayRequestError, HDFSApiError
from hdfsapi.listing import ConnectionState, HDFSFileLister, ListingResult
from hdfsapi.models import (
    FileStatus,
    decode_dir_listing,
    decode_single_status,
    format_modification_time,
    format_permission,
)

__all__ = [
    "HDFSClient",
    "Operation",
    "HDFSFileLister",
    "ConnectionState",
    "ListingResult",
    "FileStatus",
    "decode_single_status",
    "decode_dir_listing",
    "format_permission",
    "format_modification_time",
    "HDFSApiError",
    "GatewayRequestError",
    "DecodeError",
    "ConnectivityError",
]
