"""Forms for catalog management, adoption and collection workflows."""

from __future__ import annotations

import base64

from django import forms
from django.conf import settings

from definitions.models import ANIMA_LEVEL_CHOICES, ENEMY_LEVEL_CHOICES, AnimaDefinition, EnemyDefinition

SPECIES_STAT_FIELDS: tuple[str, ...] = (
    "max_health",
    "attack",
    "defense",
    "attack_speed",
    "critical_chance",
)


class SpeciesImageMixin(forms.Form):
    """Optional image upload stored on the definition as a data URL."""

    image = forms.FileField(
        required=False,
        label="Image",
        help_text="PNG/JPEG/GIF/WebP, at most 2 MB.",
        widget=forms.ClearableFileInput(attrs={"accept": "image/*"}),
    )
    clear_image = forms.BooleanField(required=False, label="Remove current image")

    def clean_image(self):
        """Reject non-image uploads and files above the configured size cap."""

        upload = self.cleaned_data.get("image")
        if not upload:
            return upload
        max_bytes = settings.NEXUS_IMAGE_MAX_BYTES
        if upload.size > max_bytes:
            raise forms.ValidationError(f"Images must be smaller than {max_bytes // (1024 * 1024)} MB.")
        content_type = getattr(upload, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise forms.ValidationError("Upload an image file.")
        return upload

    def image_data_url(self) -> str | None:
        """Return the new `image_data` value, or None to keep the current one."""

        upload = self.cleaned_data.get("image")
        if upload:
            encoded = base64.b64encode(upload.read()).decode("ascii")
            return f"data:{upload.content_type};base64,{encoded}"
        if self.cleaned_data.get("clear_image"):
            return ""
        return None

    def save(self, commit: bool = True):
        """Apply the uploaded image before saving the model instance."""

        new_image = self.image_data_url()
        if new_image is not None:
            self.instance.image_data = new_image
        return super().save(commit=commit)


class AnimaDefinitionForm(SpeciesImageMixin, forms.ModelForm):
    """Create or edit a creature species."""

    class Meta:
        model = AnimaDefinition
        fields = ["species", "level", *SPECIES_STAT_FIELDS, "next_evolution"]
        labels = {
            "max_health": "Max health",
            "attack_speed": "Attack speed",
            "critical_chance": "Critical chance (%)",
            "next_evolution": "Evolves into",
        }
        widgets = {
            "attack_speed": forms.NumberInput(attrs={"step": "0.1"}),
            "critical_chance": forms.NumberInput(attrs={"step": "0.1"}),
        }

    def __init__(self, *args, **kwargs) -> None:
        """Limit evolution choices to other species."""

        super().__init__(*args, **kwargs)
        evolutions = AnimaDefinition.objects.order_by("species")
        if self.instance.pk is not None:
            evolutions = evolutions.exclude(pk=self.instance.pk)
        self.fields["next_evolution"].queryset = evolutions
        self.fields["next_evolution"].required = False


class EnemyDefinitionForm(SpeciesImageMixin, forms.ModelForm):
    """Create or edit an adversary species."""

    class Meta:
        model = EnemyDefinition
        fields = ["species", "level", *SPECIES_STAT_FIELDS, "reward_exp", "reward_bits"]
        labels = {
            "max_health": "Max health",
            "attack_speed": "Attack speed",
            "critical_chance": "Critical chance (%)",
            "reward_exp": "Reward XP",
            "reward_bits": "Reward bits",
        }
        widgets = {
            "attack_speed": forms.NumberInput(attrs={"step": "0.1"}),
            "critical_chance": forms.NumberInput(attrs={"step": "0.1"}),
        }


class CatalogFilterForm(forms.Form):
    """Search/filter controls for a species catalog."""

    q = forms.CharField(required=False, label="Search", max_length=120)
    level = forms.ChoiceField(required=False, label="Tier")

    def __init__(self, *args, level_choices: tuple[tuple[str, str], ...], **kwargs) -> None:
        """Initialize the form with the tier choices of one catalog."""

        super().__init__(*args, **kwargs)
        self.fields["level"].choices = (("", "All tiers"), *level_choices)


def anima_filter_form(data) -> CatalogFilterForm:
    """Return a bound filter form for the creature catalog."""

    return CatalogFilterForm(data, level_choices=ANIMA_LEVEL_CHOICES)


def enemy_filter_form(data) -> CatalogFilterForm:
    """Return a bound filter form for the adversary catalog."""

    return CatalogFilterForm(data, level_choices=ENEMY_LEVEL_CHOICES)


class AdoptionForm(forms.Form):
    """Adopt one species, optionally naming the new companion."""

    anima_definition_id = forms.IntegerField(min_value=1, widget=forms.HiddenInput)
    nickname = forms.CharField(required=False, max_length=80, label="Nickname (optional)")


class RenameAnimaForm(forms.Form):
    """Set or clear an owned creature's nickname."""

    nickname = forms.CharField(required=False, max_length=80, label="Nickname")
