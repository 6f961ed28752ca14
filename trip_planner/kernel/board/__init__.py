from trip_planner.kernel.board.board_service import BoardService, InvalidMoveTarget

__all__ = ["BoardService", "InvalidMoveTarget"]
