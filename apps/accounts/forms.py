from django import forms
from django.contrib.auth import get_user_model

User = get_user_model()

PASSWORD_MIN_LENGTH = 6

NAME_MESSAGE = 'Nome deve ter entre 2 e 100 caracteres'
EMAIL_MESSAGE = 'Email deve ser válido'
PASSWORD_MESSAGE = f'Senha deve ter pelo menos {PASSWORD_MIN_LENGTH} caracteres'
EMAIL_IN_USE_MESSAGE = 'Email já está em uso'


def email_in_use(email, exclude_pk=None):
    qs = User.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


class RegisterForm(forms.Form):
    """
    Sign-up payload. The email doubles as the username.
    """
    name = forms.CharField(
        min_length=2, max_length=100, strip=True,
        error_messages={'required': 'Nome é obrigatório', 'min_length': NAME_MESSAGE, 'max_length': NAME_MESSAGE},
    )
    email = forms.EmailField(
        max_length=150,
        error_messages={'required': 'Email é obrigatório', 'invalid': EMAIL_MESSAGE},
    )
    password = forms.CharField(
        min_length=PASSWORD_MIN_LENGTH, strip=False,
        error_messages={'required': 'Senha é obrigatória', 'min_length': PASSWORD_MESSAGE},
    )

    def clean_email(self):
        email = self.cleaned_data['email'].lower()
        if email_in_use(email):
            raise forms.ValidationError(EMAIL_IN_USE_MESSAGE)
        return email

    def save(self):
        return User.objects.create_user(
            username=self.cleaned_data['email'],
            email=self.cleaned_data['email'],
            password=self.cleaned_data['password'],
            first_name=self.cleaned_data['name'],
        )


class LoginForm(forms.Form):
    email = forms.EmailField(error_messages={'required': 'Email é obrigatório', 'invalid': EMAIL_MESSAGE})
    password = forms.CharField(strip=False, error_messages={'required': 'Senha é obrigatória'})

    def clean_email(self):
        return self.cleaned_data['email'].lower()


class ProfileForm(forms.Form):
    """Partial profile update; blank fields are left untouched"""

    name = forms.CharField(
        required=False, min_length=2, max_length=100, strip=True,
        error_messages={'min_length': NAME_MESSAGE, 'max_length': NAME_MESSAGE},
    )
    email = forms.EmailField(required=False, max_length=150, error_messages={'invalid': EMAIL_MESSAGE})
    password = forms.CharField(
        required=False, min_length=PASSWORD_MIN_LENGTH, strip=False,
        error_messages={'min_length': PASSWORD_MESSAGE},
    )

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if not email:
            return email
        email = email.lower()
        if email_in_use(email, exclude_pk=self.user.pk):
            raise forms.ValidationError(EMAIL_IN_USE_MESSAGE)
        return email

    def save(self):
        user = self.user
        data = self.cleaned_data
        if data.get('name'):
            user.first_name = data['name']
        if data.get('email'):
            user.email = data['email']
            user.username = data['email']
        if data.get('password'):
            user.set_password(data['password'])
        user.save()
        return user
