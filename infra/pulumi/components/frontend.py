"""Frontend Infrastructure Component - S3 + CloudFront.

This module creates the infrastructure for hosting the React frontend:
- S3 bucket for static files (private, versioned)
- CloudFront distribution for CDN and HTTPS
- Origin Access Control for secure S3 access
"""

import pulumi
import pulumi_aws as aws

from components.config import StackSettings
from components.naming import stage_name
from components.policies import cloudfront_read_policy
from components.provider import create_provider

ORIGIN_ID = "todos-web-origin"

# (min, default, max) TTLs in seconds
ASSET_TTL = (0, 3600, 86400)
INDEX_TTL = (0, 0, 0)


def _cache_behavior(behavior_args, forwarded_args, cookies_args, ttl, **extra):
    """Build a cache behavior for the S3 origin with the given TTLs."""
    min_ttl, default_ttl, max_ttl = ttl
    return behavior_args(
        allowed_methods=["GET", "HEAD", "OPTIONS"],
        cached_methods=["GET", "HEAD"],
        target_origin_id=ORIGIN_ID,
        forwarded_values=forwarded_args(
            query_string=False,
            cookies=cookies_args(forward="none"),
        ),
        viewer_protocol_policy="redirect-to-https",
        min_ttl=min_ttl,
        default_ttl=default_ttl,
        max_ttl=max_ttl,
        compress=True,
        **extra,
    )


class FrontendComponent(pulumi.ComponentResource):
    """S3 + CloudFront infrastructure for frontend hosting."""

    def __init__(
        self,
        name: str,
        settings: StackSettings,
        tags: dict | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create frontend hosting infrastructure.

        Args:
            name: Logical name prefix
            settings: Validated stack settings (stage, region, naming)
            tags: Extra tags merged over the provider default tags
            opts: Pulumi resource options
        """
        super().__init__("todos:frontend:Site", name, None, opts)

        self.tags = tags or {}
        project, stage = settings.project, settings.stage

        self.provider = create_provider(name, settings, pulumi.ResourceOptions(parent=self))
        child_opts = pulumi.ResourceOptions(parent=self, provider=self.provider)

        # =====================================================================
        # S3 Bucket - Static File Storage
        # =====================================================================
        self.bucket = aws.s3.BucketV2(
            f"{name}-bucket",
            bucket=stage_name(project, "web", stage),
            tags=self.tags,
            opts=child_opts,
        )

        # =====================================================================
        # CloudFront Origin Access Control
        # =====================================================================
        self.oac = aws.cloudfront.OriginAccessControl(
            f"{name}-oac",
            name=stage_name(project, "web-oac", stage),
            origin_access_control_origin_type="s3",
            signing_behavior="always",
            signing_protocol="sigv4",
            opts=child_opts,
        )

        # =====================================================================
        # CloudFront Distribution
        # =====================================================================
        self.distribution = aws.cloudfront.Distribution(
            f"{name}-distribution",
            enabled=True,
            is_ipv6_enabled=True,
            price_class="PriceClass_100",
            retain_on_delete=True,
            default_root_object="index.html",
            viewer_certificate=aws.cloudfront.DistributionViewerCertificateArgs(
                cloudfront_default_certificate=True,
            ),
            restrictions=aws.cloudfront.DistributionRestrictionsArgs(
                geo_restriction=aws.cloudfront.DistributionRestrictionsGeoRestrictionArgs(
                    restriction_type="none",
                ),
            ),
            origins=[
                aws.cloudfront.DistributionOriginArgs(
                    domain_name=self.bucket.bucket_regional_domain_name,
                    origin_id=ORIGIN_ID,
                    origin_access_control_id=self.oac.id,
                ),
            ],
            # Hashed assets are cached at the edge
            default_cache_behavior=_cache_behavior(
                aws.cloudfront.DistributionDefaultCacheBehaviorArgs,
                aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesArgs,
                aws.cloudfront.DistributionDefaultCacheBehaviorForwardedValuesCookiesArgs,
                ASSET_TTL,
            ),
            # index.html is never cached so new deployments show up immediately
            ordered_cache_behaviors=[
                _cache_behavior(
                    aws.cloudfront.DistributionOrderedCacheBehaviorArgs,
                    aws.cloudfront.DistributionOrderedCacheBehaviorForwardedValuesArgs,
                    aws.cloudfront.DistributionOrderedCacheBehaviorForwardedValuesCookiesArgs,
                    INDEX_TTL,
                    path_pattern="/index.html",
                ),
            ],
            # Client-side routing: unknown paths serve the SPA entry point
            custom_error_responses=[
                aws.cloudfront.DistributionCustomErrorResponseArgs(
                    error_caching_min_ttl=300,
                    error_code=404,
                    response_code=200,
                    response_page_path="/index.html",
                ),
            ],
            tags={**self.tags, "Name": stage_name(project, "web", stage)},
            opts=child_opts,
        )

        # =====================================================================
        # S3 Bucket Configuration
        # =====================================================================
        self.bucket_acl = aws.s3.BucketAclV2(
            f"{name}-bucket-acl",
            bucket=self.bucket.id,
            acl="private",
            opts=child_opts,
        )

        # Block all public access (CloudFront will access via OAC)
        self.bucket_public_access_block = aws.s3.BucketPublicAccessBlock(
            f"{name}-bucket-public-access-block",
            bucket=self.bucket.id,
            block_public_acls=True,
            block_public_policy=True,
            ignore_public_acls=True,
            restrict_public_buckets=True,
            opts=child_opts,
        )

        self.bucket_versioning = aws.s3.BucketVersioningV2(
            f"{name}-bucket-versioning",
            bucket=self.bucket.id,
            versioning_configuration=aws.s3.BucketVersioningV2VersioningConfigurationArgs(
                status="Enabled",
            ),
            opts=child_opts,
        )

        # Allow the distribution (and only it) to read objects
        self.bucket_policy = aws.s3.BucketPolicy(
            f"{name}-bucket-policy",
            bucket=self.bucket.id,
            policy=pulumi.Output.all(self.bucket.arn, self.distribution.arn).apply(
                lambda args: cloudfront_read_policy(args[0], args[1])
            ),
            opts=pulumi.ResourceOptions.merge(
                child_opts,
                pulumi.ResourceOptions(depends_on=[self.bucket_public_access_block]),
            ),
        )

        self.url = self.distribution.domain_name.apply(lambda d: f"https://{d}")

        self.register_outputs(
            {
                "bucket_name": self.bucket.bucket,
                "distribution_id": self.distribution.id,
                "distribution_arn": self.distribution.arn,
                "url": self.url,
            }
        )
