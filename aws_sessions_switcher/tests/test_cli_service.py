"""Tests for CLIService."""

import pytest

from ..services.cli_service import CLIService
from ..services.errors import ConfigurationMissingError, LookupMissError, SwitcherError
from ..services.models import ProjectEnvironmentRecord, SessionRecord
from .fakes import FakePrompter, FakeProvider


def project_answers(project='acme', environment='prod', role='admin', arn='arn:aws:iam::123:role/X'):
    return [project, environment, arn, role]


def make_service(switcher_config, texts=(), confirms=(), selections=(), provider=None):
    prompter = FakePrompter(texts=texts, confirms=confirms, selections=selections)
    provider = provider or FakeProvider()
    return CLIService(config=switcher_config, prompter=prompter, provider_factory=lambda project: provider)


def live_session(key_id, timestamp, seconds=3600):
    return SessionRecord(key_id, f'{key_id}-secret', f'{key_id}-token', timestamp(seconds))


class TestConfigure:
    """Test cases for configure and projects add."""

    def test_configure_without_mfa(self, switcher_config):
        service = make_service(switcher_config, texts=project_answers(), confirms=[False])

        record = service.configure()

        assert record.key == 'acme-prod'
        assert record.mfa_required is False
        assert service.config_store.get('acme', 'prod') == record

    def test_configure_with_mfa_uses_default_duration(self, switcher_config):
        texts = project_answers() + ['arn:aws:iam::123:mfa/me', '']
        service = make_service(switcher_config, texts=texts, confirms=[True])

        record = service.configure()

        stored = service.config_store.get('acme', 'prod')
        assert stored.mfa_required is True
        assert stored.mfa_device_arn == 'arn:aws:iam::123:mfa/me'
        assert stored.duration_seconds == 3600
        assert record == stored

    def test_configure_refuses_existing_file(self, switcher_config):
        service = make_service(switcher_config, texts=project_answers(), confirms=[False])
        service.configure()

        with pytest.raises(SwitcherError, match="File already exists"):
            service.configure()

    def test_project_add_requires_file(self, switcher_config):
        service = make_service(switcher_config, texts=project_answers(), confirms=[False])

        with pytest.raises(ConfigurationMissingError):
            service.project_add()

    def test_project_add_appends(self, switcher_config):
        texts = project_answers() + project_answers(project='zeta')
        service = make_service(switcher_config, texts=texts, confirms=[False, False])
        service.configure()

        service.project_add()

        assert service.projects_list() == ['acme', 'zeta']


class TestProjects:
    """Test cases for listing and deleting projects."""

    @pytest.fixture
    def service(self, switcher_config):
        texts = (project_answers('foo', 'dev') + project_answers('foobar', 'dev')
                 + project_answers('foo', 'prod', role='reader'))
        service = make_service(switcher_config, texts=texts, confirms=[False, False, False])
        service.configure()
        service.project_add()
        service.project_add()
        return service

    def test_lists(self, service):
        assert service.projects_list() == ['foo', 'foobar']
        assert service.environments_list('foo') == ['dev', 'prod']
        assert service.environments_list() == ['foo-dev', 'foobar-dev', 'foo-prod']
        assert [r.role_name for r in service.roles_list('foo', 'prod')] == ['reader']

    def test_roles_list_unknown(self, service):
        with pytest.raises(LookupMissError):
            service.roles_list('foo', 'qa')

    def test_assumptions(self, service):
        rows = service.assumptions()
        assert rows[0] == ('foo/dev/admin', 'aws-sessions-switcher foo dev admin')
        assert len(rows) == 3

    def test_delete_declined(self, service):
        service.prompter.confirms = [False]

        assert service.project_delete('foo') == []
        assert len(service.config_store.load_all()) == 3

    def test_delete_confirmed(self, service):
        service.prompter.confirms = [True]

        removed = service.project_delete('foo')

        assert sorted(removed) == ['foo-dev', 'foo-prod', 'foobar-dev']
        assert service.projects_list() == []

    def test_delete_exact(self, service):
        service.prompter.confirms = [True]

        assert sorted(service.project_delete('foo', exact=True)) == ['foo-dev', 'foo-prod']
        assert service.projects_list() == ['foobar']


class TestSessions:
    """Test cases for assuming, listing and switching sessions."""

    @pytest.fixture
    def service(self, switcher_config):
        service = make_service(switcher_config, texts=project_answers(), confirms=[False])
        service.configure()
        return service

    def test_assume_then_list(self, service):
        key, session = service.assume('acme', 'prod', 'admin')

        rows = service.sessions_list()

        assert len(rows) == 1
        name, remaining, active = rows[0]
        assert name == key == 'session-acme-prod'
        assert remaining.endswith('s') and remaining != 'Expired'
        assert active is True

    def test_sessions_list_marks_inactive(self, service, timestamp):
        service.session_store.save('session-acme-prod', live_session('ONE', timestamp))
        service.session_store.save('session-acme-dev', live_session('TWO', timestamp))
        service.session_store.activate('session-acme-dev')

        rows = {name: active for name, _, active in service.sessions_list()}

        assert rows == {'session-acme-prod': False, 'session-acme-dev': True}

    def test_sessions_list_by_project(self, service, timestamp):
        service.config_store.add(ProjectEnvironmentRecord('other', 'prod', 'arn:aws:iam::456:role/Y', 'admin'))
        service.session_store.save('session-acme-prod', live_session('ONE', timestamp))
        service.session_store.save('session-other-prod', live_session('TWO', timestamp))

        assert [name for name, _, _ in service.sessions_list('other')] == ['session-other-prod']

    def test_switch_by_name(self, service, timestamp):
        service.session_store.save('session-acme-prod', live_session('ONE', timestamp))

        assert service.session_switch('session-acme-prod') == 'session-acme-prod'
        assert service.credentials.get_active()['aws_access_key_id'] == 'ONE'

    def test_switch_by_selection(self, service, timestamp):
        service.session_store.save('session-acme-prod', live_session('ONE', timestamp))
        service.session_store.save('session-acme-dev', live_session('TWO', timestamp))
        service.prompter.selections = ['session-acme-dev']

        assert service.session_switch() == 'session-acme-dev'
        assert service.credentials.get_active()['aws_access_key_id'] == 'TWO'

    def test_switch_without_sessions(self, service):
        with pytest.raises(LookupMissError, match="No active sessions present"):
            service.session_switch()

    def test_switch_to_expired_session(self, service, timestamp):
        service.session_store.save('session-acme-prod', live_session('OLD', timestamp, seconds=-1))

        with pytest.raises(LookupMissError, match="unavailable"):
            service.session_switch('session-acme-prod')


class TestReset:
    """Test cases for reset."""

    def test_reset_declined(self, switcher_config):
        service = make_service(switcher_config, texts=project_answers(), confirms=[False, False])
        service.configure()

        assert service.reset() is False
        assert service.config_store.exists()

    def test_reset_confirmed(self, switcher_config):
        service = make_service(switcher_config, texts=project_answers(), confirms=[False, True])
        service.configure()

        assert service.reset() is True
        assert not service.config_store.exists()

    def test_reset_without_file(self, switcher_config):
        service = make_service(switcher_config)

        with pytest.raises(ConfigurationMissingError):
            service.reset()
