from recube.ops.base import OpContext, execute_op, model_hash
from recube.ops.convert_ops import BatchFailure, BatchResult, ConvertResult, convert_batch, convert_meshes_to_cubes
from recube.ops.transactions import TransactionManager, TransactionRecord, get_transaction_manager

__all__ = [
    "OpContext",
    "execute_op",
    "model_hash",
    "BatchFailure",
    "BatchResult",
    "ConvertResult",
    "convert_batch",
    "convert_meshes_to_cubes",
    "TransactionManager",
    "TransactionRecord",
    "get_transaction_manager",
]
