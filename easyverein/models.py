from django.db import models


class APICredential(models.Model):
    """
    Stored API token for the easyVerein integration.

    When a row exists it takes precedence over the API_TOKEN environment
    variable, and refreshed tokens are written back to it.
    """

    provider = models.CharField(
        max_length=50,
        unique=True,
        help_text="API provider name (e.g., 'easyverein')"
    )
    api_token = models.TextField(
        help_text="Current bearer token"
    )

    # Audit fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'api_credentials'
        ordering = ['provider']
        verbose_name = 'API Credential'
        verbose_name_plural = 'API Credentials'

    def __str__(self):
        return f"{self.provider} API credential"

    def update_token(self, api_token):
        """Replace the stored token and save."""
        self.api_token = api_token
        self.save(update_fields=['api_token', 'updated_at'])
