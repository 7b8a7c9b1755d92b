"""Operation tests für den TodoStore

Tests für die CRUD Methoden gegen eine In-Memory Tabelle:
- list_todos(), get_todo(), create_todo(), update_todo(), delete_todo()
"""
