from django.db import IntegrityError, transaction
from django.test import TestCase

from social.models.block import Block
from social.tests.helpers import make_user


class BlockModelTestCase(TestCase):
    def setUp(self):
        self.blocker = make_user(username="blocker")
        self.blocked = make_user(username="blocked")

    def test_user_can_block_another_user(self):
        block = Block.objects.create(blocker=self.blocker, blocked=self.blocked)
        self.assertEqual(block.blocker, self.blocker)
        self.assertEqual(block.blocked, self.blocked)

    def test_duplicate_block_not_allowed(self):
        Block.objects.create(blocker=self.blocker, blocked=self.blocked)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Block.objects.create(blocker=self.blocker, blocked=self.blocked)

    def test_cannot_block_self(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Block.objects.create(blocker=self.blocker, blocked=self.blocker)

    def test_deleting_user_removes_blocks(self):
        Block.objects.create(blocker=self.blocker, blocked=self.blocked)
        self.blocked.delete()
        self.assertFalse(Block.objects.exists())

    def test_string_representation(self):
        block = Block.objects.create(blocker=self.blocker, blocked=self.blocked)
        s = str(block)
        self.assertIn("Block(", s)
        self.assertIn(str(self.blocker.id), s)
