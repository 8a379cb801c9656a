"""Tests for presence registration and message delivery with a mocked Socket.IO server."""

import unittest
from unittest.mock import patch

from chat_backend.core.dto import UserDTO
from chat_backend.services import MessageService, PresenceService

from support import ContainerTestMixin


class ServiceTestCase(ContainerTestMixin, unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self._scope = self.container()
        request_container = await self._scope.__aenter__()
        self.presence = await request_container.get(PresenceService)
        self.messages = await request_container.get(MessageService)

    async def asyncTearDown(self):
        await self._scope.__aexit__(None, None, None)
        await super().asyncTearDown()


class TestPresenceService(ServiceTestCase):

    async def test_register_broadcasts_full_user_list(self):
        await self.presence.register("u1", "s1")
        await self.presence.register("u2", "s2")

        broadcasts = self.emitted("getUsers")
        self.assertEqual(len(broadcasts), 2)
        data, to = broadcasts[-1]
        self.assertIsNone(to)
        self.assertEqual([u["userId"] for u in data], ["u1", "u2"])

    async def test_reregister_overwrites_socket_id(self):
        await self.presence.register("u1", "s1")
        await self.presence.register("u1", "s7")

        users = await self.presence.list_all()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].socket_id, "s7")

    async def test_disconnect_keeps_stale_record(self):
        await self.presence.register("u1", "s1")
        self.sio.emit.reset_mock()

        await self.presence.disconnect("s1")

        [(data, to)] = self.emitted("getUsers")
        self.assertIsNone(to)
        self.assertEqual(data, [{"_id": data[0]["_id"], "userId": "u1", "socketId": "s1"}])


class TestMessageService(ServiceTestCase):

    async def test_send_pushes_to_online_receiver(self):
        await self.presence.register("u2", "s2")

        msg = await self.messages.send("u1", "u2", "hello", [])

        self.assertFalse(msg.seen)
        [(data, to)] = self.emitted("getMessage")
        self.assertEqual(to, "s2")
        self.assertEqual(data["_id"], msg.id)
        self.assertEqual(data["text"], "hello")

    async def test_send_to_unknown_receiver_only_stores(self):
        msg = await self.messages.send("u1", "ghost", "hello")

        self.assertIsNotNone(msg)
        self.assertEqual(self.emitted("getMessage"), [])
        self.assertEqual([m.id for m in await self.messages.history("u1", "ghost")], [msg.id])

    async def test_send_with_missing_fields_is_dropped(self):
        for sender, receiver, text in [
            ("", "u2", "hi"),
            ("u1", None, "hi"),
            ("u1", "u2", ""),
            (None, None, None),
        ]:
            self.assertIsNone(await self.messages.send(sender, receiver, text))

        self.assertEqual(await self.messages.history("u1", "u2"), [])
        self.sio.emit.assert_not_awaited()

    async def test_history_is_symmetric(self):
        msg = await self.messages.send("A", "B", "hi", [])

        self.assertEqual([m.id for m in await self.messages.history("A", "B")], [msg.id])
        self.assertEqual([m.id for m in await self.messages.history("B", "A")], [msg.id])

    async def test_mark_seen_notifies_sender(self):
        await self.presence.register("u1", "s1")
        msg = await self.messages.send("u1", "u2", "hello")

        self.assertTrue(await self.messages.mark_seen("u1", "u2", msg.id))

        [(data, to)] = self.emitted("messageSeen")
        self.assertEqual(to, "s1")
        self.assertEqual(data, {"senderId": "u1", "receiverId": "u2", "messageId": msg.id})
        [stored] = await self.messages.history("u1", "u2")
        self.assertTrue(stored.seen)

    async def test_mark_seen_is_idempotent(self):
        msg = await self.messages.send("u1", "u2", "hello")

        self.assertTrue(await self.messages.mark_seen("u1", "u2", msg.id))
        self.assertTrue(await self.messages.mark_seen("u1", "u2", str(msg.id)))

        [stored] = await self.messages.history("u1", "u2")
        self.assertTrue(stored.seen)

    async def test_mark_seen_unknown_or_malformed_id_is_noop(self):
        self.assertFalse(await self.messages.mark_seen("u1", "u2", 999))
        self.assertFalse(await self.messages.mark_seen("u1", "u2", "not-an-id"))
        self.assertFalse(await self.messages.mark_seen("u1", "u2", None))
        self.assertEqual(self.emitted("messageSeen"), [])

    async def test_mark_seen_boolean_id_is_not_message_one(self):
        await self.presence.register("u1", "s1")
        msg = await self.messages.send("u1", "u2", "hello")
        self.assertEqual(msg.id, 1)

        self.assertFalse(await self.messages.mark_seen("u1", "u2", True))

        [stored] = await self.messages.history("u1", "u2")
        self.assertFalse(stored.seen)
        self.assertEqual(self.emitted("messageSeen"), [])

    async def test_delivery_targets_come_from_presence_lookup(self):
        self.assertIs(self.messages.presence, self.presence)
        online = UserDTO(id=1, user_id="u2", socket_id="s-live")

        with patch.object(self.presence, "lookup", return_value=online) as lookup:
            msg = await self.messages.send("u1", "u2", "hello")
            await self.messages.mark_seen("u1", "u2", msg.id)

        self.assertEqual([c.args for c in lookup.await_args_list], [("u2",), ("u1",)])
        self.assertEqual(self.emitted("getMessage")[0][1], "s-live")
        self.assertEqual(self.emitted("messageSeen")[0][1], "s-live")

    async def test_update_last_message_is_broadcast(self):
        await self.messages.update_last_message("see you", "m-42")

        self.sio.emit.assert_awaited_once_with(
            "getLastMessage", {"lastMessage": "see you", "lastMessagesId": "m-42"}
        )


if __name__ == "__main__":
    unittest.main()
