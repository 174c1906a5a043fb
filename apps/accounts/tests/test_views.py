import pytest
from django.contrib.auth.models import User
from django.urls import reverse


def post_json(client, name, body):
    return client.post(reverse(f'accounts:{name}'), body, content_type='application/json')


def detail_fields(response):
    return {detail['field'] for detail in response.json()['details']}


@pytest.mark.django_db
class TestRegister:
    def test_register_logs_in(self, client):
        response = post_json(client, 'register', {'name': 'João', 'email': 'Joao@Example.com', 'password': 'abc123'})

        assert response.status_code == 201
        user = response.json()['user']
        assert user['email'] == 'joao@example.com'
        assert user['name'] == 'João'
        assert 'password' not in user
        assert client.get(reverse('accounts:profile')).status_code == 200

    def test_validation(self, client):
        response = post_json(client, 'register', {'name': 'J', 'email': 'nope', 'password': '123'})
        assert response.status_code == 400
        assert detail_fields(response) == {'name', 'email', 'password'}

    def test_email_must_be_unique(self, client, test_user):
        response = post_json(client, 'register', {'name': 'Outra', 'email': 'MARIA@example.com', 'password': 'abc123'})
        assert response.status_code == 400
        assert response.json()['details'] == [{'field': 'email', 'message': 'Email já está em uso'}]


@pytest.mark.django_db
class TestLogin:
    def test_login(self, client, test_user):
        response = post_json(client, 'login', {'email': 'maria@example.com', 'password': 'segredo1'})
        assert response.status_code == 200
        assert response.json()['user']['id'] == test_user.pk

    def test_wrong_password(self, client, test_user):
        response = post_json(client, 'login', {'email': 'maria@example.com', 'password': 'errada'})
        assert response.status_code == 401
        assert response.json()['error'] == 'Credenciais inválidas'

    def test_unknown_email(self, client):
        response = post_json(client, 'login', {'email': 'ghost@example.com', 'password': 'segredo1'})
        assert response.status_code == 401

    def test_deactivated_user(self, client, test_user):
        test_user.is_active = False
        test_user.save()
        response = post_json(client, 'login', {'email': 'maria@example.com', 'password': 'segredo1'})
        assert response.status_code == 401
        assert response.json()['error'] == 'Usuário desativado'

    def test_logout(self, auth_client):
        assert post_json(auth_client, 'logout', {}).status_code == 200
        assert auth_client.get(reverse('accounts:profile')).status_code == 401

    def test_csrf_cookie(self, client):
        response = client.get(reverse('accounts:csrf'))
        assert response.status_code == 200
        assert 'csrftoken' in response.cookies


@pytest.mark.django_db
class TestProfile:
    def test_requires_login(self, client):
        assert client.get(reverse('accounts:profile')).status_code == 401

    def test_get(self, auth_client):
        assert auth_client.get(reverse('accounts:profile')).json()['user']['name'] == 'Maria'

    def test_update_name_and_password(self, auth_client, test_user):
        response = auth_client.put(
            reverse('accounts:profile'), {'name': 'Maria Silva', 'password': 'novasenha'},
            content_type='application/json',
        )

        assert response.status_code == 200
        test_user.refresh_from_db()
        assert test_user.first_name == 'Maria Silva'
        assert test_user.check_password('novasenha')
        assert test_user.email == 'maria@example.com'
        # session survives the password change
        assert auth_client.get(reverse('accounts:profile')).status_code == 200

    def test_email_taken_by_someone_else(self, auth_client, staff_user):
        response = auth_client.put(
            reverse('accounts:profile'), {'email': 'admin@example.com'}, content_type='application/json'
        )
        assert response.status_code == 400
        assert detail_fields(response) == {'email'}


@pytest.mark.django_db
class TestStaffUserAdmin:
    def test_requires_staff(self, auth_client):
        response = auth_client.get(reverse('accounts:user_list'))
        assert response.status_code == 403

    def test_requires_login(self, client):
        assert client.get(reverse('accounts:user_list')).status_code == 401

    def test_list(self, staff_client, test_user):
        body = staff_client.get(reverse('accounts:user_list'), {'limit': 1}).json()
        assert body['pagination'] == {'total': 2, 'page': 1, 'limit': 1, 'totalPages': 2}
        assert len(body['users']) == 1

    def test_detail(self, staff_client, test_user):
        response = staff_client.get(reverse('accounts:user_detail', args=[test_user.pk]))
        assert response.json()['user']['email'] == 'maria@example.com'

    def test_detail_missing(self, staff_client):
        response = staff_client.get(reverse('accounts:user_detail', args=[999999]))
        assert response.status_code == 404

    def test_deactivate_and_activate(self, staff_client, test_user):
        response = staff_client.patch(reverse('accounts:user_deactivate', args=[test_user.pk]))
        assert response.status_code == 200
        test_user.refresh_from_db()
        assert test_user.is_active is False

        staff_client.patch(reverse('accounts:user_activate', args=[test_user.pk]))
        test_user.refresh_from_db()
        assert test_user.is_active is True

    def test_cannot_deactivate_self(self, staff_client, staff_user):
        response = staff_client.patch(reverse('accounts:user_deactivate', args=[staff_user.pk]))
        assert response.status_code == 403
        assert User.objects.get(pk=staff_user.pk).is_active
