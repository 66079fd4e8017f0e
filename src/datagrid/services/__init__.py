"""Qt-free grid services: matching, sorting, paging, selection, export."""
