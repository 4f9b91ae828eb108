from rest_framework import serializers

from .models import Interview


class InterviewSerializer(serializers.ModelSerializer):
    """
    Document shape of an interview record as delivered by the record store.
    """
    user_id = serializers.ReadOnlyField()

    class Meta:
        model = Interview
        fields = [
            'id', 'user_id', 'company_name', 'job_position', 'interviewer_name',
            'interview_date', 'priority_level', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class InterviewDraftSerializer(serializers.Serializer):
    """
    Validates user-supplied interview fields for create and (partially) for update.
    """
    company_name = serializers.CharField(max_length=255)
    job_position = serializers.CharField(max_length=255)
    interviewer_name = serializers.CharField(max_length=255)
    interview_date = serializers.DateField()
    priority_level = serializers.ChoiceField(choices=Interview.PRIORITY_CHOICES, default='Medium')
    status = serializers.ChoiceField(choices=Interview.STATUS_CHOICES, default=Interview.STATUS_PENDING)

    protected_fields = ('id', 'user_id', 'created_at', 'updated_at')

    def validate(self, attrs):
        """
        Reject store-assigned keys such as `user_id` or timestamps. Other extra keys are ignored.
        """
        protected = [field for field in self.protected_fields if field in self.initial_data]
        if protected:
            raise serializers.ValidationError(
                {field: "This field cannot be set." for field in protected}
            )
        if self.partial and not attrs:
            raise serializers.ValidationError("No fields to update.")
        return attrs
