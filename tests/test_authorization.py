import unittest
from types import SimpleNamespace
from unittest import mock

from app.application.services import authorization
from app.application.services.authorization import Actor
from app.core.exceptions import EntityNotFoundException, ForbiddenException


class ActorTestCase(unittest.TestCase):

    def test_roles_come_from_the_user(self):
        user = SimpleNamespace(id="u-1", role_names={"Administrador", "Cliente"})

        actor = Actor.from_user(user)

        self.assertTrue(actor.is_admin)
        self.assertTrue(actor.is_customer)

    def test_user_without_roles(self):
        actor = Actor(id="u-2")

        self.assertFalse(actor.is_admin)
        with self.assertRaises(ForbiddenException):
            authorization.require_authenticated_role(actor, "create_order")


class PermissionChecksTestCase(unittest.TestCase):

    def setUp(self):
        self.customer = Actor(id="c-1", roles=frozenset({"Cliente"}))
        self.admin = Actor(id="a-1", roles=frozenset({"Administrador"}))

    def test_denials_are_logged(self):
        """
        Cenário: Toda negação de acesso gera um aviso no log com a ação tentada.
        """
        with mock.patch.object(authorization, "logger") as logger:
            with self.assertRaises(ForbiddenException):
                authorization.require_admin(self.customer, "delete_order")

        logger.warning.assert_called_once_with("Permission denied", actor_id="c-1", action="delete_order")

    def test_owner_or_admin(self):
        authorization.require_owner_or_admin(self.customer, "c-1", "update_review")
        authorization.require_owner_or_admin(self.admin, "c-1", "update_review")

        with self.assertRaises(ForbiddenException):
            authorization.require_owner_or_admin(self.customer, "c-2", "update_review")

    def test_hidden_denial_looks_like_missing_record(self):
        with self.assertRaises(EntityNotFoundException) as ctx:
            authorization.require_owner_or_admin_hidden(self.customer, "c-2", "get_order", "Pedido não encontrado")

        self.assertEqual(ctx.exception.message, "Pedido não encontrado")
        self.assertEqual(ctx.exception.status_code, 404)
