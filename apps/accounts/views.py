"""
Session authentication for the SPA, plus staff user administration.
"""
import logging

from django.contrib.auth import get_user_model, login as auth_login, logout as auth_logout, update_session_auth_hash
from django.core.paginator import EmptyPage, Paginator
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.exceptions import AuthenticationFailed, NotFound, PermissionDenied
from apps.core.http import api_login_required, api_response, parse_json, raise_form_errors, staff_required
from .forms import LoginForm, ProfileForm, RegisterForm

logger = logging.getLogger(__name__)

User = get_user_model()

USERS_PAGE_SIZE = 10


def serialize_user(user):
    return {
        'id': user.pk,
        'name': user.first_name,
        'email': user.email,
        'isActive': user.is_active,
        'isStaff': user.is_staff,
        'createdAt': user.date_joined,
        'lastLogin': user.last_login,
    }


def _get_user(pk):
    try:
        return User.objects.get(pk=pk)
    except User.DoesNotExist:
        raise NotFound('Usuário não encontrado')


@require_GET
@ensure_csrf_cookie
def csrf(request):
    """Sets the csrftoken cookie the SPA echoes back in X-CSRFToken"""
    return api_response({'message': 'CSRF cookie definido'})


@require_POST
def register(request):
    form = RegisterForm(parse_json(request))
    if not form.is_valid():
        raise_form_errors(form)

    user = form.save()
    auth_login(request, user)
    logger.info(f"Novo usuário registrado: id={user.pk} email={user.email}")
    return api_response(
        {'message': 'Usuário registrado com sucesso', 'user': serialize_user(user)},
        status=201,
    )


@require_POST
def login(request):
    form = LoginForm(parse_json(request))
    if not form.is_valid():
        raise_form_errors(form)

    email = form.cleaned_data['email']
    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.check_password(form.cleaned_data['password']):
        logger.warning(f"Falha de login para {email}")
        raise AuthenticationFailed('Credenciais inválidas')
    if not user.is_active:
        logger.warning(f"Login recusado, usuário desativado: id={user.pk}")
        raise AuthenticationFailed('Usuário desativado')

    auth_login(request, user, backend='django.contrib.auth.backends.ModelBackend')
    return api_response({'message': 'Login realizado com sucesso', 'user': serialize_user(user)})


@require_POST
def logout(request):
    auth_logout(request)
    return api_response({'message': 'Logout realizado com sucesso'})


@api_login_required
@require_http_methods(['GET', 'PUT'])
def profile(request):
    if request.method == 'GET':
        return api_response({'message': 'Perfil obtido com sucesso', 'user': serialize_user(request.user)})

    form = ProfileForm(parse_json(request), user=request.user)
    if not form.is_valid():
        raise_form_errors(form)

    user = form.save()
    if form.cleaned_data.get('password'):
        # keep the current session valid after the hash changes
        update_session_auth_hash(request, user)
    logger.info(f"Perfil atualizado: id={user.pk}")
    return api_response({'message': 'Perfil atualizado com sucesso', 'user': serialize_user(user)})


# ============================================================
# Staff
# ============================================================

def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@staff_required
@require_GET
def user_list(request):
    page = _positive_int(request.GET.get('page'), 1)
    limit = min(_positive_int(request.GET.get('limit'), USERS_PAGE_SIZE), 100)

    paginator = Paginator(User.objects.order_by('-date_joined', '-id'), limit)
    try:
        users = list(paginator.page(page).object_list)
    except EmptyPage:
        users = []

    return api_response({
        'message': 'Usuários listados com sucesso',
        'users': [serialize_user(user) for user in users],
        'pagination': {
            'total': paginator.count,
            'page': page,
            'limit': limit,
            'totalPages': paginator.num_pages if paginator.count else 0,
        },
    })


@staff_required
@require_GET
def user_detail(request, pk):
    return api_response({'message': 'Usuário encontrado', 'user': serialize_user(_get_user(pk))})


def _set_active(request, pk, active):
    user = _get_user(pk)
    if user.pk == request.user.pk and not active:
        raise PermissionDenied('Não é possível desativar o próprio usuário')
    user.is_active = active
    user.save(update_fields=['is_active'])
    logger.info(f"Usuário {'reativado' if active else 'desativado'}: id={user.pk} por staff={request.user.pk}")
    return user


@staff_required
@require_http_methods(['PATCH'])
def user_deactivate(request, pk):
    user = _set_active(request, pk, False)
    return api_response({'message': 'Usuário desativado com sucesso', 'user': serialize_user(user)})


@staff_required
@require_http_methods(['PATCH'])
def user_activate(request, pk):
    user = _set_active(request, pk, True)
    return api_response({'message': 'Usuário reativado com sucesso', 'user': serialize_user(user)})
