"""Project orchestrator: create, list, search, update and delete."""

import pytest
from sqlmodel import select

from src.tracker.core.exceptions import EntitlementExceeded, NotFound, Unauthorized
from src.tracker.models import Chat, Invitation, Issue, Message, PlanType
from src.tracker.repositories import ProjectRepository
from src.tracker.schemas.project import ProjectCreate, ProjectUpdate
from tests.factories import IssueFactory
from tests.helpers import build_project_service, create_project, create_user, team_and_chat

pytestmark = pytest.mark.integration


class TestCreateProject:
    async def test_owner_is_sole_member_of_team_and_chat(self, db_session, owner):
        project = await create_project(db_session, owner, name="Apollo", tags=["web"])

        team, chat_users = await team_and_chat(db_session, project.id)
        assert team == chat_users == {owner.id}
        assert project.owner_id == owner.id
        assert project.tags == ["web"]
        assert owner.project_size == 1

    async def test_limit_not_enforced_by_default(self, db_session, owner):
        for i in range(4):
            await create_project(db_session, owner, name=f"P{i}")

        assert owner.project_size == 4

    async def test_free_plan_limit_when_enforced(self, db_session, owner, settings_override):
        settings_override(enforce_project_limit=True)
        for i in range(3):
            await create_project(db_session, owner, name=f"P{i}")
        owner_id = owner.id

        with pytest.raises(EntitlementExceeded):
            await create_project(db_session, owner, name="One too many")

        projects = await ProjectRepository(db_session).list_for_user(owner_id)
        assert len(projects) == 3

    async def test_annual_plan_is_unlimited(self, db_session, settings_override):
        settings_override(enforce_project_limit=True)
        user = await create_user(db_session, project_size=50)
        service = build_project_service(db_session)
        await service.subscription_service.update_subscription(user.id, PlanType.ANNUALLY)

        project = await service.create_project(ProjectCreate(name="Unlimited"), user)

        assert project.name == "Unlimited"
        assert user.project_size == 51


class TestListAndSearch:
    async def test_list_filters(self, db_session, owner):
        await create_project(db_session, owner, name="Alpha", category="web", tags=["react"])
        await create_project(db_session, owner, name="Beta", category="web", tags=["vue"])
        await create_project(db_session, owner, name="Gamma", category="ml", tags=["react"])
        service = build_project_service(db_session)

        assert len(await service.list_projects(owner)) == 3
        assert {p.name for p in await service.list_projects(owner, category="web")} == {
            "Alpha",
            "Beta",
        }
        assert {p.name for p in await service.list_projects(owner, tag="react")} == {
            "Alpha",
            "Gamma",
        }
        both = await service.list_projects(owner, category="web", tag="react")
        assert [p.name for p in both] == ["Alpha"]

    async def test_list_includes_projects_joined_as_member(self, db_session, owner, bob):
        project = await create_project(db_session, owner, name="Shared")
        await create_project(db_session, owner, name="Private")
        service = build_project_service(db_session)
        await service.membership_service.add_member(project.id, bob.id)

        assert [p.name for p in await service.list_projects(bob)] == ["Shared"]

    async def test_search_is_case_insensitive_substring(self, db_session, owner, bob):
        await create_project(db_session, owner, name="Moon Landing")
        await create_project(db_session, owner, name="Mars Rover")
        await create_project(db_session, bob, name="Moonshot")
        service = build_project_service(db_session)

        found = await service.search_projects("MOON", owner)

        assert [p.name for p in found] == ["Moon Landing"]
        assert await service.search_projects("100%", owner) == []


class TestUpdateProject:
    async def test_owner_updates_fields(self, db_session, owner):
        project = await create_project(db_session, owner, name="Old")
        service = build_project_service(db_session)

        updated = await service.update_project(
            project.id, owner.id, ProjectUpdate(name="New", tags=["a", "b"])
        )

        assert updated.name == "New"
        assert updated.tags == ["a", "b"]

    async def test_non_owner_cannot_update(self, db_session, owner, bob):
        project = await create_project(db_session, owner, name="Old")
        project_id, bob_id = project.id, bob.id
        service = build_project_service(db_session)

        with pytest.raises(Unauthorized):
            await service.update_project(project_id, bob_id, ProjectUpdate(name="Hijacked"))

        assert (await service.get_project(project_id)).name == "Old"

    async def test_null_tags_and_name_are_ignored(self, db_session, owner):
        project = await create_project(db_session, owner, name="Keep", tags=["web"])
        service = build_project_service(db_session)

        updated = await service.update_project(
            project.id,
            owner.id,
            ProjectUpdate.model_validate({"name": None, "tags": None, "category": "ops"}),
        )

        assert updated.name == "Keep"
        assert updated.tags == ["web"]
        assert updated.category == "ops"
        assert [p.name for p in await service.list_projects(owner, tag="web")] == ["Keep"]

    async def test_description_can_be_cleared(self, db_session, owner):
        project = await create_project(db_session, owner)
        service = build_project_service(db_session)
        await service.update_project(project.id, owner.id, ProjectUpdate(description="Draft"))

        updated = await service.update_project(
            project.id, owner.id, ProjectUpdate.model_validate({"description": None})
        )

        assert updated.description is None


class TestVisibility:
    async def test_team_member_sees_project_and_chat(self, db_session, owner, bob):
        project = await create_project(db_session, owner)
        service = build_project_service(db_session)
        await service.membership_service.add_member(project.id, bob.id)

        assert (await service.assert_member(project.id, bob.id)).id == project.id
        _, roster = await service.get_chat(project.id, bob.id)
        assert set(roster) == {owner.id, bob.id}

    async def test_non_member_is_rejected(self, db_session, owner, bob):
        project = await create_project(db_session, owner)
        service = build_project_service(db_session)

        with pytest.raises(Unauthorized):
            await service.assert_member(project.id, bob.id)

        with pytest.raises(Unauthorized):
            await service.get_chat(project.id, bob.id)


class TestDeleteProject:
    async def test_non_owner_cannot_delete(self, db_session, owner, bob):
        project = await create_project(db_session, owner)
        project_id, bob_id = project.id, bob.id
        service = build_project_service(db_session)

        with pytest.raises(Unauthorized):
            await service.delete_project(project_id, bob_id)

        assert await service.get_project(project_id) is not None

    async def test_missing_project(self, db_session, owner):
        service = build_project_service(db_session)
        project = await create_project(db_session, owner)
        project_id, owner_id = project.id, owner.id
        await service.delete_project(project_id, owner_id)

        with pytest.raises(NotFound):
            await service.delete_project(project_id, owner_id)

    async def test_delete_cascades(self, db_session, owner, bob, mock_send_invitation_email):
        project = await create_project(db_session, owner)
        service = build_project_service(db_session)
        await service.membership_service.add_member(project.id, bob.id)
        chat, _ = await service.get_chat(project.id)
        db_session.add(Message(chat_id=chat.id, sender_id=bob.id, content="hello"))
        db_session.add(IssueFactory.build(project_id=project.id))
        await db_session.commit()
        await service.invitation_service.send_invitation("carol@example.com", project.id, owner.id)
        project_id, chat_id = project.id, chat.id

        await service.delete_project(project_id, owner.id)

        for model, column in (
            (Chat, Chat.project_id),
            (Issue, Issue.project_id),
            (Invitation, Invitation.project_id),
        ):
            rows = (await db_session.execute(select(model).where(column == project_id))).all()
            assert rows == []
        messages = await db_session.execute(select(Message).where(Message.chat_id == chat_id))
        assert messages.all() == []

        await db_session.refresh(owner)
        await db_session.refresh(bob)
        assert owner.project_size == 0
        assert bob.project_size == 0
