from django import forms
from apps.goals.domain.entities import GENERAL_CONTEXT


class GoalPointsForm(forms.Form):
    context = forms.CharField(max_length=100, required=False, initial=GENERAL_CONTEXT)
    value = forms.IntegerField()
    # Użytkownik potwierdził ostrzeżenie o zbyt wysokim celu
    confirm = forms.BooleanField(required=False)

    def clean_value(self):
        value = self.cleaned_data['value']
        if value <= 0:
            raise forms.ValidationError("Goal value must be greater than zero")
        return value

    def clean_context(self):
        return self.cleaned_data.get('context') or GENERAL_CONTEXT
