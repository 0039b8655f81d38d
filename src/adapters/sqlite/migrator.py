import logging
import os
import sqlite3

logger = logging.getLogger(__name__)

DOWN_MARKER = "-- Down"


class SQLiteMigrator:
    """Applies numbered ``*.sql`` files from a directory, each exactly once."""

    def __init__(self, db_path: str, migrations_dir: str):
        self.db_path = db_path
        self.migrations_dir = migrations_dir

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _ensure_migration_table(self, conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)

    def applied_migrations(self) -> set[str]:
        conn = self._get_connection()
        try:
            self._ensure_migration_table(conn)
            cursor = conn.execute("SELECT filename FROM _migrations")
            return {row[0] for row in cursor.fetchall()}
        finally:
            conn.close()

    def pending_migrations(self) -> list[str]:
        applied = self.applied_migrations()
        files = sorted(f for f in os.listdir(self.migrations_dir) if f.endswith(".sql"))
        return [f for f in files if f not in applied]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        pending = self.pending_migrations()
        if not pending:
            logger.debug("Database %s is up to date", self.db_path)
            return []

        conn = self._get_connection()
        try:
            for filename in pending:
                logger.info("Applying migration %s", filename)
                self._apply_migration(conn, filename)
        finally:
            conn.close()

        logger.info("Applied %d migration(s) to %s", len(pending), self.db_path)
        return pending

    def _read_up_script(self, filename: str) -> str:
        path = os.path.join(self.migrations_dir, filename)
        with open(path) as f:
            content = f.read()

        # Only the part above the down marker is applied.
        return content.split(DOWN_MARKER, 1)[0]

    def _apply_migration(self, conn: sqlite3.Connection, filename: str) -> None:
        script = self._read_up_script(filename)
        try:
            conn.executescript(script)
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (filename,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
