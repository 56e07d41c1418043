# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models returned by the Zoho CRM client.

- :class:`~zoho_crm_client.models.record.Record`: One row of a record listing.
- :class:`~zoho_crm_client.models.field.FieldDescriptor`: Schema field metadata.
- :class:`~zoho_crm_client.models.mutation_result.MutationResult`: Outcome of a
  create/update/delete/upload operation on one row.
- :class:`~zoho_crm_client.models.mutation_result.ZohoError`: Vendor (code, message) pair.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files.
"""

__all__ = []
