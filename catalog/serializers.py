from rest_framework import serializers

from api.exceptions import ResourceAlreadyExistsError

from .models import Category


class CategorySerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=50)
    description = serializers.CharField(max_length=200, required=False, allow_blank=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'is_active', 'created_at']
        read_only_fields = ['id', 'is_active', 'created_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Category name is required.")

        duplicates = Category.objects.filter(name__iexact=value)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ResourceAlreadyExistsError(
                detail="Category with this name already exists.",
                conflicting_fields=['name'],
            )
        return value


class CategorySummarySerializer(serializers.ModelSerializer):
    """Id and name only, for nesting in profile and job payloads."""

    class Meta:
        model = Category
        fields = ['id', 'name']
        read_only_fields = fields
