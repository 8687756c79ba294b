"""GRI Standards 2021 disclosures supported by the drafter, keyed by code."""

from typing import NamedTuple


class StandardEntry(NamedTuple):
    title: str
    text: str


GRI_KNOWLEDGE_BASE: dict[str, StandardEntry] = {
    # GRI 2: General Disclosures 2021
    "GRI 2-1": StandardEntry(
        "Organizational details",
        "Report the legal name, nature of ownership and legal form, location of headquarters, and countries of operation.",
    ),
    "GRI 2-2": StandardEntry(
        "Entities included in the organization's sustainability reporting",
        "List all entities included in sustainability reporting and explain differences with the list of entities in the financial statements, including the approach for consolidating information.",
    ),
    "GRI 2-3": StandardEntry(
        "Reporting period, frequency and contact point",
        "Specify the reporting period and frequency, the publication date, and the contact point for questions about the report. Explain any difference from the financial reporting period.",
    ),
    "GRI 2-4": StandardEntry(
        "Restatements of information",
        "Report restatements of information made from previous reporting periods, the reasons for them, and their effect.",
    ),
    "GRI 2-5": StandardEntry(
        "External assurance",
        "Describe the policy and practice for seeking external assurance, the highest governance body's involvement, and the scope and standards of any assurance obtained.",
    ),
    "GRI 2-6": StandardEntry(
        "Activities, value chain and other business relationships",
        "Report the sectors in which the organization is active, its value chain (products, services, markets, supply chain, downstream entities), other relevant business relationships, and significant changes compared to the previous period.",
    ),
    "GRI 2-7": StandardEntry(
        "Employees",
        "Report the total number of employees broken down by gender and region, and by permanent, temporary, non-guaranteed hours, full-time and part-time employees. Describe methodologies and significant fluctuations.",
    ),
    "GRI 2-8": StandardEntry(
        "Workers who are not employees",
        "Report the total number of workers who are not employees and whose work is controlled by the organization, the most common types of worker and work performed, and methodologies used.",
    ),
    "GRI 2-9": StandardEntry(
        "Governance structure and composition",
        "Describe the governance structure, including committees of the highest governance body, committees responsible for managing impacts, and the composition of the highest governance body.",
    ),
    "GRI 2-10": StandardEntry(
        "Nomination and selection of the highest governance body",
        "Describe the nomination and selection processes for the highest governance body and its committees, and the criteria used, including diversity, independence and competencies.",
    ),
    "GRI 2-11": StandardEntry(
        "Chair of the highest governance body",
        "Report whether the chair of the highest governance body is also a senior executive, and if so explain the function and how conflicts of interest are prevented.",
    ),
    "GRI 2-12": StandardEntry(
        "Role of the highest governance body in overseeing the management of impacts",
        "Describe the role of the highest governance body and senior executives in developing and approving purpose, values, strategies and policies related to sustainable development, and in overseeing due diligence.",
    ),
    "GRI 2-13": StandardEntry(
        "Delegation of responsibility for managing impacts",
        "Describe how the highest governance body delegates responsibility for managing impacts on the economy, environment and people, and the process for senior executives to report back.",
    ),
    "GRI 2-14": StandardEntry(
        "Role of the highest governance body in sustainability reporting",
        "Report whether the highest governance body reviews and approves reported information, including material topics, and if not, explain why.",
    ),
    "GRI 2-15": StandardEntry(
        "Conflicts of interest",
        "Describe the processes to ensure conflicts of interest are prevented and mitigated, and whether they are disclosed to stakeholders.",
    ),
    "GRI 2-16": StandardEntry(
        "Communication of critical concerns",
        "Describe whether and how critical concerns are communicated to the highest governance body, and report the total number and nature of critical concerns communicated during the period.",
    ),
    "GRI 2-17": StandardEntry(
        "Collective knowledge of the highest governance body",
        "Report measures taken to advance the collective knowledge, skills and experience of the highest governance body on sustainable development.",
    ),
    "GRI 2-18": StandardEntry(
        "Evaluation of the performance of the highest governance body",
        "Describe the processes for evaluating the performance of the highest governance body in overseeing impacts, whether evaluations are independent, and actions taken in response.",
    ),
    "GRI 2-19": StandardEntry(
        "Remuneration policies",
        "Describe the remuneration policies for members of the highest governance body and senior executives, including fixed and variable pay, sign-on bonuses, termination payments, clawbacks and retirement benefits.",
    ),
    "GRI 2-20": StandardEntry(
        "Process to determine remuneration",
        "Describe the process for designing remuneration policies and determining remuneration, including independent oversight and stakeholder views, and report results of votes where applicable.",
    ),
    "GRI 2-21": StandardEntry(
        "Annual total compensation ratio",
        "Report the ratio of annual total compensation for the highest-paid individual to the median of all other employees, the ratio of their percentage increases, and contextual information.",
    ),
    "GRI 2-22": StandardEntry(
        "Statement on sustainable development strategy",
        "Report a statement from the highest governance body or most senior executive about the relevance of sustainable development to the organization and its strategy.",
    ),
    "GRI 2-23": StandardEntry(
        "Policy commitments",
        "Describe policy commitments for responsible business conduct, including human rights, how they are approved, and how they are communicated to workers and business partners.",
    ),
    "GRI 2-24": StandardEntry(
        "Embedding policy commitments",
        "Describe how policy commitments are embedded throughout activities and business relationships, including allocation of responsibility and training.",
    ),
    "GRI 2-25": StandardEntry(
        "Processes to remediate negative impacts",
        "Describe commitments to provide for or cooperate in the remediation of negative impacts, grievance mechanisms, and how their effectiveness is tracked.",
    ),
    "GRI 2-26": StandardEntry(
        "Mechanisms for seeking advice and raising concerns",
        "Describe the mechanisms for individuals to seek advice on responsible business conduct and to raise concerns about the organization's conduct.",
    ),
    "GRI 2-27": StandardEntry(
        "Compliance with laws and regulations",
        "Report the total number of significant instances of non-compliance with laws and regulations, the fines paid, and how significant instances are determined.",
    ),
    "GRI 2-28": StandardEntry(
        "Membership associations",
        "Report industry associations, other membership associations and national or international advocacy organizations in which the organization participates in a significant role.",
    ),
    "GRI 2-29": StandardEntry(
        "Approach to stakeholder engagement",
        "Describe the approach to engaging with stakeholders, including the categories of stakeholders, how they are identified, and the purpose of engagement.",
    ),
    "GRI 2-30": StandardEntry(
        "Collective bargaining agreements",
        "Report the percentage of total employees covered by collective bargaining agreements, and for those not covered, how working conditions are determined.",
    ),
    # GRI 3: Material Topics 2021
    "GRI 3-1": StandardEntry(
        "Process to determine material topics",
        "Describe the process followed to determine material topics, including how actual and potential impacts were identified and prioritized, and the stakeholders and experts consulted.",
    ),
    "GRI 3-2": StandardEntry(
        "List of material topics",
        "List the material topics and report changes to the list compared to the previous reporting period.",
    ),
    "GRI 3-3": StandardEntry(
        "Management of material topics",
        "For each material topic, describe the actual and potential impacts, policies and commitments, actions taken, tracking of effectiveness, goals and lessons learned, and stakeholder engagement.",
    ),
    # GRI 200 series: Economic
    "GRI 201-1": StandardEntry(
        "Direct economic value generated and distributed",
        "Report direct economic value generated (revenues) and distributed (operating costs, employee wages and benefits, payments to providers of capital, payments to government, community investments), and economic value retained.",
    ),
    "GRI 201-2": StandardEntry(
        "Financial implications and other risks and opportunities due to climate change",
        "Describe climate-related risks and opportunities with potential to generate substantive changes in operations, revenue or expenditure, their financial implications, management methods and costs.",
    ),
    "GRI 201-3": StandardEntry(
        "Defined benefit plan obligations and other retirement plans",
        "Report the estimated value of defined benefit plan liabilities, how they are met, coverage, and the level of participation in retirement plans.",
    ),
    "GRI 201-4": StandardEntry(
        "Financial assistance received from government",
        "Report the total monetary value of financial assistance received from any government, such as tax relief, subsidies, grants and awards, broken down by country.",
    ),
    "GRI 205-1": StandardEntry(
        "Operations assessed for risks related to corruption",
        "Report the total number and percentage of operations assessed for risks related to corruption, and the significant risks identified through the risk assessment.",
    ),
    "GRI 205-2": StandardEntry(
        "Communication and training about anti-corruption policies and procedures",
        "Report the number and percentage of governance body members, employees and business partners to whom anti-corruption policies and procedures have been communicated, and who have received training.",
    ),
    "GRI 205-3": StandardEntry(
        "Confirmed incidents of corruption and actions taken",
        "Report the total number and nature of confirmed incidents of corruption, incidents leading to dismissal or disciplinary action, terminated contracts, and public legal cases.",
    ),
    "GRI 206-1": StandardEntry(
        "Legal actions for anti-competitive behavior, anti-trust, and monopoly practices",
        "Report the number of pending or completed legal actions regarding anti-competitive behavior and violations of anti-trust and monopoly legislation, and their main outcomes.",
    ),
    # GRI 300 series: Environmental
    "GRI 301-1": StandardEntry(
        "Materials used by weight or volume",
        "Report the total weight or volume of materials used to produce and package primary products and services, split into non-renewable and renewable materials.",
    ),
    "GRI 301-2": StandardEntry(
        "Recycled input materials used",
        "Report the percentage of recycled input materials used to manufacture the organization's primary products and services.",
    ),
    "GRI 301-3": StandardEntry(
        "Reclaimed products and their packaging materials",
        "Report the percentage of reclaimed products and their packaging materials for each product category, and how the data was collected.",
    ),
    "GRI 302-1": StandardEntry(
        "Energy consumption within the organization",
        "Report total fuel consumption from non-renewable and renewable sources, electricity, heating, cooling and steam consumed and sold, and total energy consumption in joules or multiples, with standards and conversion factors used.",
    ),
    "GRI 302-2": StandardEntry(
        "Energy consumption outside of the organization",
        "Report energy consumption outside the organization in joules or multiples, with standards, methodologies, assumptions and conversion factors used.",
    ),
    "GRI 302-3": StandardEntry(
        "Energy intensity",
        "Report the energy intensity ratio, the organization-specific metric chosen as denominator, the types of energy included, and whether the ratio covers energy inside, outside or both.",
    ),
    "GRI 302-4": StandardEntry(
        "Reduction of energy consumption",
        "Report the amount of reductions in energy consumption achieved as a direct result of conservation and efficiency initiatives, the types of energy included, and the baseline used.",
    ),
    "GRI 302-5": StandardEntry(
        "Reductions in energy requirements of products and services",
        "Report reductions in the energy requirements of sold products and services achieved during the reporting period, and the basis for calculation.",
    ),
    "GRI 303-1": StandardEntry(
        "Interactions with water as a shared resource",
        "Describe how the organization interacts with water, how water-related impacts are identified and addressed, and how water-related goals are set.",
    ),
    "GRI 303-2": StandardEntry(
        "Management of water discharge-related impacts",
        "Describe the minimum standards set for the quality of effluent discharge and how they were determined.",
    ),
    "GRI 303-3": StandardEntry(
        "Water withdrawal",
        "Report total water withdrawal from all areas and from areas with water stress in megaliters, broken down by source (surface water, groundwater, seawater, produced water, third-party water).",
    ),
    "GRI 303-4": StandardEntry(
        "Water discharge",
        "Report total water discharge to all areas in megaliters, broken down by destination and by freshwater or other water, and priority substances of concern.",
    ),
    "GRI 303-5": StandardEntry(
        "Water consumption",
        "Report total water consumption from all areas and from areas with water stress in megaliters, and the change in water storage where it has a significant impact.",
    ),
    "GRI 305-1": StandardEntry(
        "Direct (Scope 1) GHG emissions",
        "Report gross direct (Scope 1) GHG emissions in metric tons of CO2 equivalent, gases included, biogenic CO2 emissions, the base year, sources of emission factors and GWP rates, and the consolidation approach.",
    ),
    "GRI 305-2": StandardEntry(
        "Energy indirect (Scope 2) GHG emissions",
        "Report gross location-based and, where applicable, market-based energy indirect (Scope 2) GHG emissions in metric tons of CO2 equivalent, with the base year and methodologies used.",
    ),
    "GRI 305-3": StandardEntry(
        "Other indirect (Scope 3) GHG emissions",
        "Report gross other indirect (Scope 3) GHG emissions in metric tons of CO2 equivalent, the Scope 3 categories and activities included, and the base year.",
    ),
    "GRI 305-4": StandardEntry(
        "GHG emissions intensity",
        "Report the GHG emissions intensity ratio, the denominator chosen, the scopes included and the gases included in the calculation.",
    ),
    "GRI 305-5": StandardEntry(
        "Reduction of GHG emissions",
        "Report GHG emissions reduced as a direct result of reduction initiatives in metric tons of CO2 equivalent, the gases and scopes included, and the base year or baseline.",
    ),
    "GRI 305-6": StandardEntry(
        "Emissions of ozone-depleting substances (ODS)",
        "Report production, imports and exports of ozone-depleting substances in metric tons of CFC-11 equivalent, the substances included, and the sources of emission factors.",
    ),
    "GRI 305-7": StandardEntry(
        "Nitrogen oxides (NOx), sulfur oxides (SOx), and other significant air emissions",
        "Report significant air emissions in kilograms or multiples for NOx, SOx, persistent organic pollutants, volatile organic compounds, hazardous air pollutants, particulate matter and other standard categories.",
    ),
    "GRI 306-1": StandardEntry(
        "Waste generation and significant waste-related impacts",
        "Describe the inputs, activities and outputs that lead or could lead to significant waste-related impacts, in the organization's own activities and along its value chain.",
    ),
    "GRI 306-2": StandardEntry(
        "Management of significant waste-related impacts",
        "Describe actions taken to prevent waste generation and manage significant impacts, how third parties manage waste in line with obligations, and the processes used to collect and monitor waste data.",
    ),
    "GRI 306-3": StandardEntry(
        "Waste generated",
        "Report the total weight of waste generated in metric tons, with a breakdown by composition of the waste.",
    ),
    "GRI 306-4": StandardEntry(
        "Waste diverted from disposal",
        "Report the total weight of waste diverted from disposal in metric tons, by composition, for hazardous and non-hazardous waste, by recovery operation (reuse, recycling, other), onsite and offsite.",
    ),
    "GRI 306-5": StandardEntry(
        "Waste directed to disposal",
        "Report the total weight of waste directed to disposal in metric tons, by composition, for hazardous and non-hazardous waste, by disposal operation (incineration, landfilling, other), onsite and offsite.",
    ),
    # GRI 400 series: Social
    "GRI 401-1": StandardEntry(
        "New employee hires and employee turnover",
        "Report the total number and rate of new employee hires and of employee turnover during the reporting period, by age group, gender and region.",
    ),
    "GRI 401-2": StandardEntry(
        "Benefits provided to full-time employees that are not provided to temporary or part-time employees",
        "Report benefits that are standard for full-time employees but not provided to temporary or part-time employees, such as life insurance, health care, disability coverage, parental leave and retirement provision.",
    ),
    "GRI 401-3": StandardEntry(
        "Parental leave",
        "Report, by gender, employees entitled to and taking parental leave, employees returning to work after leave and still employed twelve months later, and return to work and retention rates.",
    ),
    "GRI 402-1": StandardEntry(
        "Minimum notice periods regarding operational changes",
        "Report the minimum number of weeks' notice typically provided to employees and their representatives prior to significant operational changes, and whether it is specified in collective agreements.",
    ),
    "GRI 403-1": StandardEntry(
        "Occupational health and safety management system",
        "Report whether an occupational health and safety management system has been implemented, the legal requirements or standards it follows, and the scope of workers, activities and workplaces covered.",
    ),
    "GRI 403-2": StandardEntry(
        "Hazard identification, risk assessment, and incident investigation",
        "Describe the processes used to identify work-related hazards and assess risks, how workers can report hazards and remove themselves from dangerous situations, and how incidents are investigated.",
    ),
    "GRI 403-3": StandardEntry(
        "Occupational health services",
        "Describe the functions of occupational health services that contribute to the identification and elimination of hazards and minimization of risks, and how workers' access is facilitated.",
    ),
    "GRI 403-4": StandardEntry(
        "Worker participation, consultation, and communication on occupational health and safety",
        "Describe the processes for worker participation and consultation in developing, implementing and evaluating the management system, and any formal joint management-worker health and safety committees.",
    ),
    "GRI 403-5": StandardEntry(
        "Worker training on occupational health and safety",
        "Describe any occupational health and safety training provided to workers, including generic training and training on specific work-related hazards and hazardous activities.",
    ),
    "GRI 403-6": StandardEntry(
        "Promotion of worker health",
        "Describe how the organization facilitates workers' access to non-occupational medical and healthcare services, and voluntary health promotion services and programs.",
    ),
    "GRI 403-7": StandardEntry(
        "Prevention and mitigation of occupational health and safety impacts directly linked by business relationships",
        "Describe the approach to preventing or mitigating significant negative occupational health and safety impacts directly linked to operations, products or services by business relationships.",
    ),
    "GRI 403-8": StandardEntry(
        "Workers covered by an occupational health and safety management system",
        "Report the number and percentage of employees and other workers covered by the management system, covered and internally audited, and covered and audited or certified by an external party.",
    ),
    "GRI 403-9": StandardEntry(
        "Work-related injuries",
        "Report, for employees and other workers, the number and rate of fatalities, high-consequence work-related injuries and recordable work-related injuries, the main types of injury and hours worked.",
    ),
    "GRI 403-10": StandardEntry(
        "Work-related ill health",
        "Report, for employees and other workers, the number of fatalities and recordable cases of work-related ill health, and the main types of work-related ill health.",
    ),
    "GRI 404-1": StandardEntry(
        "Average hours of training per year per employee",
        "Report the average hours of training that employees have undertaken during the reporting period, by gender and by employee category.",
    ),
    "GRI 404-2": StandardEntry(
        "Programs for upgrading employee skills and transition assistance programs",
        "Describe the type and scope of programs implemented to upgrade employee skills, and transition assistance programs that facilitate continued employability and the management of career endings.",
    ),
    "GRI 404-3": StandardEntry(
        "Percentage of employees receiving regular performance and career development reviews",
        "Report the percentage of total employees, by gender and by employee category, who received a regular performance and career development review during the reporting period.",
    ),
    "GRI 405-1": StandardEntry(
        "Diversity of governance bodies and employees",
        "Report the percentage of individuals within governance bodies and of employees per employee category by gender, age group (under 30, 30-50, over 50), and other indicators of diversity where relevant.",
    ),
    "GRI 405-2": StandardEntry(
        "Ratio of basic salary and remuneration of women to men",
        "Report the ratio of the basic salary and remuneration of women to men for each employee category, by significant locations of operation.",
    ),
    "GRI 418-1": StandardEntry(
        "Substantiated complaints concerning breaches of customer privacy and losses of customer data",
        "Report the total number of substantiated complaints received concerning breaches of customer privacy, from outside parties and from regulatory bodies, and the total number of identified leaks, thefts or losses of customer data.",
    ),
}
