import unittest
from unittest.mock import patch

from pymongo.errors import ServerSelectionTimeoutError

from contacts_api.config import Config
from contacts_api.database import DatabaseManager
from contacts_api.errors import NotInitializedError, PersistenceError


@patch("contacts_api.database.MongoClient")
class TestDatabaseManager(unittest.TestCase):

    def test_get_db_before_connect(self, mock_client):
        with self.assertRaises(NotInitializedError):
            DatabaseManager("mongodb://localhost").get_db()

    def test_connect(self, mock_client):
        manager = DatabaseManager("mongodb://localhost", "contactsDB")
        db = manager.connect()
        client = mock_client.return_value
        client.admin.command.assert_called_once_with("ping")
        client.__getitem__.assert_called_once_with("contactsDB")
        self.assertIs(db, client.__getitem__.return_value)
        self.assertIs(manager.get_db(), db)
        self.assertTrue(manager.is_connected)

    def test_connect_twice_returns_cached_handle(self, mock_client):
        manager = DatabaseManager("mongodb://localhost", "contactsDB")
        first = manager.connect()
        second = manager.connect("mongodb://elsewhere", "otherDB")
        self.assertIs(first, second)
        mock_client.assert_called_once()

    def test_connect_without_uri(self, mock_client):
        with patch.object(Config, "MONGODB_URI", None):
            with self.assertRaises(PersistenceError):
                DatabaseManager().connect()
        mock_client.assert_not_called()

    def test_connect_malformed_uri(self, mock_client):
        mock_client.side_effect = ValueError("Port contains non-digit characters")
        manager = DatabaseManager("mongodb://host:notaport")
        with self.assertRaises(PersistenceError) as exc:
            manager.connect()
        self.assertEqual(exc.exception.error, "Port contains non-digit characters")
        self.assertFalse(manager.is_connected)

    def test_connect_failure(self, mock_client):
        mock_client.return_value.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        manager = DatabaseManager("mongodb://localhost")
        with self.assertRaises(PersistenceError) as exc:
            manager.connect()
        self.assertEqual(exc.exception.error, "no servers")
        mock_client.return_value.close.assert_called_once()
        self.assertFalse(manager.is_connected)
        with self.assertRaises(NotInitializedError):
            manager.get_db()

    def test_close(self, mock_client):
        manager = DatabaseManager("mongodb://localhost")
        manager.connect()
        manager.close()
        mock_client.return_value.close.assert_called_once()
        self.assertFalse(manager.is_connected)
        with self.assertRaises(NotInitializedError):
            manager.get_db()

    def test_close_when_never_connected(self, mock_client):
        DatabaseManager().close()
        mock_client.return_value.close.assert_not_called()


if __name__ == '__main__':
    unittest.main()
