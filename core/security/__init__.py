"""
Core Security Module

Row-level access policy for the PDI apps:

- roles:      Role registry and policy operations
- ownership:  Entity ownership map (owner/secondary attributes, sensitivity)
- policy:     Visibility policy evaluator (pure, never raises)
- masking:    Confidentiality masking of serialized rows
- fallback:   Live/degraded data-source controller
- managers:   Server-side visible_to(actor) queryset filter
- services:   Read pipeline and write gate used by domain services
"""
