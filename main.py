#This file is for development purposes only

import logging
import sys

from monday_client_impl.monday_service import get_service


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    service = get_service(interactive=True)

    print("\nFetching boards...")
    try:
        boards = service.get_boards()
        for board in boards:
            print(f"- {board.id}: {board.name}")
    except Exception as e:
        print(f"Error connecting to monday: {e}")
        return

    if len(sys.argv) < 2:
        return

    try:
        board = service.get_board(int(sys.argv[1]))
        for item in service.get_items(board):
            values = ", ".join(f"{cv.title}={cv.value}" for cv in item.column_values)
            print(f"- {item!r} {values}")
    except Exception as e:
        print(f"Error reading board {sys.argv[1]}: {e}")

if __name__ == "__main__":
    main()
